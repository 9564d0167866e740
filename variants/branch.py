# variants/branch.py
"""
Git branch lookups and the branch consistency check.

Each variant is expected to be deployed from its own branch:
    main    -> private
    public  -> public
    sandbox -> sandbox

The consistency check only reports; it never changes which variant is used.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from .registry import RepositoryVariant, parse_variant


logger = logging.getLogger(__name__)

GIT_TIMEOUT = 5

BRANCH_VARIANTS = {
    'main': RepositoryVariant.PRIVATE,
    'public': RepositoryVariant.PUBLIC,
    'sandbox': RepositoryVariant.SANDBOX,
}

VARIANT_BRANCHES = {variant: branch for branch, variant in BRANCH_VARIANTS.items()}


# ============================================
# GIT
# ============================================

def _git(args, cwd=None) -> str | None:
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=GIT_TIMEOUT,
        )
    except (subprocess.TimeoutExpired, OSError) as e:
        logger.debug(f"git {' '.join(args)} unavailable: {e}")
        return None

    if result.returncode != 0:
        logger.debug(f"git {' '.join(args)} exited {result.returncode}: {result.stderr.strip()}")
        return None

    return result.stdout.strip() or None


def current_branch(cwd: Path | None = None) -> str | None:
    """
    Name of the checked-out branch, or None.

    None covers every way git can fail to answer: no git binary, not a
    repository, a timeout, and a detached HEAD.
    """
    branch = _git(["rev-parse", "--abbrev-ref", "HEAD"], cwd=cwd)
    if branch == "HEAD":
        return None
    return branch


def current_commit(cwd: Path | None = None) -> str | None:
    """Short hash of HEAD, or None outside a repository."""
    return _git(["rev-parse", "--short", "HEAD"], cwd=cwd)


# ============================================
# BRANCH <-> VARIANT MAPPING
# ============================================

def normalize_branch(branch) -> str | None:
    """Branch name without surrounding whitespace; None when there is no name."""
    if not branch or not branch.strip():
        return None
    return branch.strip()


def variant_for_branch(branch) -> RepositoryVariant | None:
    """Variant implied by a branch name; None for any other branch."""
    branch = normalize_branch(branch)
    if branch is None:
        return None
    return BRANCH_VARIANTS.get(branch)


def expected_branch(variant) -> str:
    return VARIANT_BRANCHES[parse_variant(variant)]


@dataclass(frozen=True)
class BranchCheck:
    consistent: bool
    expected_branch: str
    actual_branch: str | None
    variant: RepositoryVariant

    @property
    def warning(self) -> str | None:
        if self.consistent:
            return None
        return (
            f"Repository variant '{self.variant.value}' is normally deployed from "
            f"branch '{self.expected_branch}', but the current branch is "
            f"'{self.actual_branch}'. Switch to '{self.expected_branch}' or run "
            f"'manage.py set_variant {BRANCH_VARIANTS[self.actual_branch].value}'."
        )


def check_branch_consistency(variant, branch) -> BranchCheck:
    """
    Compare a resolved variant with the branch it was found on.

    Only a branch that belongs to a different variant is a mismatch. No
    branch at all, or a branch outside the mapping (feature branches,
    detached checkouts), leaves nothing to compare and counts as consistent.
    """
    variant = parse_variant(variant)
    if variant is None:
        raise ValueError("check_branch_consistency() needs a valid repository variant")

    branch = normalize_branch(branch)
    expected = VARIANT_BRANCHES[variant]
    consistent = branch not in BRANCH_VARIANTS or branch == expected
    return BranchCheck(
        consistent=consistent,
        expected_branch=expected,
        actual_branch=branch,
        variant=variant,
    )
