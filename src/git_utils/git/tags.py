"""Tag listing."""

from __future__ import annotations

from ..types import GitTag
from .executor import GitExecutor

# Lightweight tags only fill the plain fields; annotated tags also fill the
# dereferenced (*) ones, which take precedence.
TAG_FORMAT = (
    "%(refname:short)|%(creatordate:relative)|%(objectname:short)|%(*objectname:short)"
    "|%(contents:subject)|%(*subject)|%(taggername)"
)


def parse_tags(output: str) -> list[GitTag]:
    """Parse `git tag --format=TAG_FORMAT` output."""
    tags: list[GitTag] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        parts = line.split("|")
        parts += [""] * (7 - len(parts))
        name, date, light_hash, annotated_hash, light_subject, annotated_subject = parts[:6]
        tagger = "|".join(parts[6:])
        if not name.strip():
            continue
        tags.append(
            GitTag(
                name=name.strip(),
                date=date.strip() or "Unknown",
                hash=(annotated_hash or light_hash).strip(),
                subject=(annotated_subject or light_subject).strip(),
                tagger=tagger.strip() or "Unknown",
            )
        )
    return tags


def get_tags(executor: GitExecutor) -> list[GitTag]:
    """List tags, highest version first."""
    result = executor.run(["tag", "--sort=-version:refname", f"--format={TAG_FORMAT}"])
    return parse_tags(result.stdout)
