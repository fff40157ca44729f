from __future__ import annotations

from pathlib import Path


class PathTranslator:
    """
    Translate workspace paths between the service view and the docker
    daemon (host) view.
    """

    def __init__(self, cfg: dict):
        self.sandbox_root = Path(cfg["sandbox_root"]).expanduser().resolve()
        self.host_root = (Path(cfg.get(
            "host_root", self.sandbox_root)).expanduser().resolve())

    def to_host(self, path: str | Path) -> Path:
        """
        Convert a workspace path to the path docker should bind.
        Paths outside of the sandbox root are returned unchanged.
        """
        p = Path(path).expanduser()
        if not p.is_absolute():
            p = (self.sandbox_root / p).resolve()
        try:
            rel = p.relative_to(self.sandbox_root)
            return (self.host_root / rel).resolve()
        except ValueError:
            return p.resolve()
