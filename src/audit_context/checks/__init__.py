"""Repository-wide compliance checks.

Each check takes the repository root and its slice of the configuration
and returns an ordered list of findings; none of them writes anything.
"""

from .issue_docs import check_issue_docs, issues_root_exists
from .non_negotiables import (
    check_language_policy,
    check_non_negotiables,
    check_secret_files,
    check_test_presence,
    find_source_files,
)
from .structure import check_directory_structure

__all__ = [
    'check_directory_structure',
    'check_non_negotiables',
    'check_language_policy',
    'check_secret_files',
    'check_test_presence',
    'find_source_files',
    'check_issue_docs',
    'issues_root_exists',
]
