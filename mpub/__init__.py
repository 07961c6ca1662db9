"""mpub: publish finished Maven artifacts to a remote repository."""

__version__ = "0.1.0"
