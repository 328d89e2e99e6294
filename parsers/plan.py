import hashlib
from pathlib import Path

from common.model.errors import MalformedPlanFile, MissingArtifact
from common.model.types import PlanHash
from common.parse.regexes import PLAN


def canonicalize_plan(lines: list[str]) -> str:
    """
    Drop every digit and the surrounding whitespace of each line, then join
    without separator. Plans differing only in estimates canonicalize equal.
    """
    return "".join(PLAN.digit.sub("", line).strip() for line in lines)


def plan_hash(path: Path) -> PlanHash:
    """
    md5 hex digest of the canonical plan text stored at `path`.
    """
    if not path.exists():
        raise MissingArtifact(f"plan file not found: {path}")
    if not path.is_file():
        raise MalformedPlanFile(f"plan path is not a regular file: {path}")

    with path.open("r", errors="replace") as f:
        canonical = canonicalize_plan(f.readlines())

    return hashlib.md5(canonical.encode("utf-8")).hexdigest()
