"""Backend da matriz de competências (HCM)."""
