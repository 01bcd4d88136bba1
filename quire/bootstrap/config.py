"""Configuration for repository bootstrap.

>>> BootstrapConfig().seed_root.name
'seed_templates'

"""

from __future__ import annotations

import dataclasses as dc
import os
from pathlib import Path

from .seed import DEFAULT_SEED_ROOT


@dc.dataclass(frozen=True, slots=True)
class BootstrapConfig:
    """Settings for seeding new repositories.

    Attributes
    ----------
    seed_root
        Directory whose files are committed under ``.github/`` in every
        bootstrapped repository. Defaults to the templates packaged with
        Quire.

    """

    seed_root: Path = DEFAULT_SEED_ROOT

    @classmethod
    def from_env(cls) -> BootstrapConfig:
        """Read ``QUIRE_SEED_TEMPLATES_PATH``, falling back to the default."""
        raw = os.environ.get("QUIRE_SEED_TEMPLATES_PATH", "").strip()
        if not raw:
            return cls()
        return cls(seed_root=Path(raw).expanduser())
