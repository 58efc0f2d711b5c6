"""
Incrementa a versão semântica do arquivo VERSION (patch por padrão).

Usage:
  python scripts/bump_version.py [major|minor|patch]
"""

import sys

from hcm_skills.version import VERSION_FILE, read_version

PARTS = ("major", "minor", "patch")


def bump(part: str = "patch") -> str:
    if part not in PARTS:
        raise SystemExit(f"Parte inválida: {part!r} (use {', '.join(PARTS)})")

    major, minor, patch = (int(x) for x in read_version().split("."))
    if part == "major":
        major, minor, patch = major + 1, 0, 0
    elif part == "minor":
        minor, patch = minor + 1, 0
    else:
        patch += 1

    new_version = f"{major}.{minor}.{patch}"
    VERSION_FILE.write_text(new_version, encoding="utf-8")
    print(new_version)
    return new_version


if __name__ == "__main__":
    bump(sys.argv[1] if len(sys.argv) > 1 else "patch")
