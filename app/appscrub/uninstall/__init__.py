"""Discovery, deletion and restoration of application files.

The pipeline is: FileScanner.scan() -> Deleter.delete() ->
record_deletion(); later TrashRestorer.restore() on a record's files.
"""

from appscrub.uninstall.catalog import CatalogDirectory, build_catalog
from appscrub.uninstall.deleter import Deleter
from appscrub.uninstall.history import record_deletion
from appscrub.uninstall.matcher import MatchRule, build_search_terms, match_rule, matches
from appscrub.uninstall.privileged import PrivilegedDeleter, SudoAuthorization
from appscrub.uninstall.restorer import TrashRestorer
from appscrub.uninstall.safety import PathSafetyValidator, default_allowed_prefixes
from appscrub.uninstall.scanner import FileScanner, measure_size
from appscrub.uninstall.trash import TrashBin, unique_trash_name

__all__ = [
    "CatalogDirectory",
    "Deleter",
    "FileScanner",
    "MatchRule",
    "PathSafetyValidator",
    "PrivilegedDeleter",
    "SudoAuthorization",
    "TrashBin",
    "TrashRestorer",
    "build_catalog",
    "build_search_terms",
    "default_allowed_prefixes",
    "match_rule",
    "matches",
    "measure_size",
    "record_deletion",
    "unique_trash_name",
]
