from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import SimpleNamespace
from typing import Mapping, Optional


_BOOLEAN_TRUE = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Config:
    """Runtime configuration assembled from environment variables and CLI options."""

    base_dir: Path
    estimate_path: Optional[Path]
    output_dir: Path
    export: bool = True
    init: bool = False
    init_name: str = ""
    verbose: bool = False

    def output_stem(self, estimate_name: str) -> str:
        if estimate_name.strip():
            return estimate_name.strip()
        if self.estimate_path is not None:
            return self.estimate_path.stem
        return "spray-foam-estimate"

    def summary_xlsx(self, estimate_name: str) -> Path:
        return (self.output_dir / f"{self.output_stem(estimate_name)}_summary.xlsx").resolve()

    def areas_csv(self, estimate_name: str) -> Path:
        return (self.output_dir / f"{self.output_stem(estimate_name)}_areas.csv").resolve()


def _to_path(value: object | None) -> Optional[Path]:
    if value is None:
        return None
    if isinstance(value, Path):
        return value.expanduser().resolve()
    text = str(value).strip()
    if not text:
        return None
    return Path(text).expanduser().resolve()


def _flag(value: object | None) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _BOOLEAN_TRUE


def _namespace(cli_args: object | None) -> SimpleNamespace:
    if cli_args is None:
        return SimpleNamespace()
    if isinstance(cli_args, SimpleNamespace):
        return cli_args
    if hasattr(cli_args, "__dict__"):
        return SimpleNamespace(**{k: v for k, v in vars(cli_args).items()})
    return SimpleNamespace()


def load_config(env: Mapping[str, str], cli_args: object | None = None) -> Config:
    """Build a runtime :class:`Config` from environment variables and CLI options."""

    base_dir = Path(__file__).resolve().parents[2]
    default_output_dir = (base_dir / "outputs").resolve()

    estimate_path = _to_path(env.get("FOAMEST_ESTIMATE"))
    output_dir = _to_path(env.get("FOAMEST_OUTPUT_DIR")) or default_output_dir
    export = not _flag(env.get("FOAMEST_DISABLE_EXPORT"))
    verbose = _flag(env.get("FOAMEST_VERBOSE"))
    init = False
    init_name = ""

    cli_ns = _namespace(cli_args)
    if getattr(cli_ns, "estimate", None):
        estimate_path = _to_path(cli_ns.estimate) or estimate_path
    if getattr(cli_ns, "output_dir", None):
        output_dir = _to_path(cli_ns.output_dir) or output_dir
    if getattr(cli_ns, "no_export", False):
        export = False
    if getattr(cli_ns, "init", False):
        init = True
    if getattr(cli_ns, "name", None):
        init_name = str(cli_ns.name)
    if getattr(cli_ns, "verbose", False):
        verbose = True

    return Config(
        base_dir=base_dir,
        estimate_path=estimate_path,
        output_dir=output_dir,
        export=export,
        init=init,
        init_name=init_name,
        verbose=verbose,
    )


__all__ = ["Config", "load_config"]
