"""Process exit codes.

Each failure kind of the publishing pipeline maps to exactly one of these codes.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (missing metadata, missing artifact, invalid config)
    - 2: Environment error (credentials not configured)
    - 3: Signing error (signer missing or rejected a file)
    - 4: Network error (upload rejected or transport failure)
    - 5: Timeout (signing or upload did not complete in time)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    SIGNING_ERROR = 3
    NETWORK_ERROR = 4
    TIMEOUT = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK

    @property
    def is_error(self) -> bool:
        return self != ErrorCode.OK
