"""
Contribution counting - which changed files of a PR count as questions.

Questions are screenshot files committed under the contribution root:

- scoped:   member/<author>/<file>   only the PR author's own folder counts
- unscoped: member/<any>/<file>      any subfolder counts, the author comes
                                     from the PR event, not from the path

Directory markers (paths ending in "/") never count.
"""

import logging
from typing import Iterable

from app.core.config import PathMatchMode

logger = logging.getLogger(__name__)

DEFAULT_ROOT = "member"


def parse_change_set(raw: str) -> list[str]:
    """Split the CHANGED_FILES value into trimmed, non-empty paths."""
    return [line.strip() for line in (raw or "").splitlines() if line.strip()]


def is_contribution(
    path: str,
    actor: str,
    root: str = DEFAULT_ROOT,
    mode: PathMatchMode = PathMatchMode.SCOPED
) -> bool:
    path = path.strip()
    if not path or path.endswith("/"):
        return False

    if mode == PathMatchMode.SCOPED:
        prefix = f"{root}/{actor}/"
        return path.startswith(prefix) and path != prefix

    prefix = f"{root}/"
    if not path.startswith(prefix):
        return False
    # <subfolder>/<rest>, both non-empty
    subfolder, _, rest = path[len(prefix):].partition("/")
    return bool(subfolder) and bool(rest)


def count_contributions(
    change_set: Iterable[str],
    actor: str,
    root: str = DEFAULT_ROOT,
    mode: PathMatchMode = PathMatchMode.SCOPED
) -> int:
    """
    Count the paths of a change-set that are question contributions.

    Args:
        change_set: changed file paths, in PR order
        actor: PR author (compared lower-cased in scoped mode)
        root: top-level folder holding the member folders
        mode: scoped or unscoped predicate

    Returns:
        Number of matching paths
    """
    actor = actor.strip().lower()
    files = [
        path.strip() for path in change_set
        if is_contribution(path, actor, root, mode)
    ]

    where = f"{root}/{actor}/" if mode == PathMatchMode.SCOPED else f"{root}/*/"
    logger.info(f"📂 Files under {where} ({mode.value}):")
    for f in files:
        logger.info(f"     {f}")

    return len(files)
