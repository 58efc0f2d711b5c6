"""Versão da aplicação, lida do arquivo VERSION na raiz do repositório."""

from pathlib import Path

VERSION_FILE = Path(__file__).resolve().parents[1] / "VERSION"
DEFAULT_VERSION = "0.0.0"


def read_version(version_file: Path = VERSION_FILE) -> str:
    """Versão semântica do arquivo informado; ``0.0.0`` se ausente ou vazio."""
    try:
        return version_file.read_text(encoding="utf-8").strip() or DEFAULT_VERSION
    except OSError:
        return DEFAULT_VERSION
