"""URL validation and uniqueness checks."""

from reposync.validation.uniqueness import UniquenessChecker
from reposync.validation.validator import UrlValidator

__all__ = ["UniquenessChecker", "UrlValidator"]
