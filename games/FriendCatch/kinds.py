"""
FriendCatch - Entity kind registry.

Kinds are data, not branches: each kind carries its role, spawn weight,
scoring effect and visual token, and the rest of the game looks those up.
The registry is loaded from a YAML file (kinds.yaml next to this module by
default).

Usage:
    registry = load_kind_registry()
    friend = registry['friend']
    harmful = registry.by_role(KindRole.HARMFUL)
"""
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from catchfall.errors import InvalidConfigurationError
from catchfall.logging import get_logger
from models import Color

log = get_logger('kinds')

DEFAULT_KINDS_FILE = Path(__file__).parent / 'kinds.yaml'


class KindRole(str, Enum):
    """What catching (or missing) an entity of this kind does."""
    BENEFICIAL = "beneficial"
    HARMFUL = "harmful"
    POWER_UP = "power_up"


class PowerUpVariant(str, Enum):
    """Sub-effects a power-up can resolve to.

    Attributes:
        SLOW_TIME: Timed modifier that scales every fall speed by the slow factor
        EXTRA_LIFE: Grants bonus lives immediately
    """
    SLOW_TIME = "slow_time"
    EXTRA_LIFE = "extra_life"


class KindSpec(BaseModel):
    """Immutable description of one entity kind.

    Attributes:
        name: Registry key, also the visual key
        role: Beneficial, harmful or power-up
        weight: Share of the role's spawn probability (0 disables spawning)
        points: Score for catching a beneficial kind
        life_penalty: Lives lost when a harmful kind is caught
        score_penalty: Extra score lost when a harmful kind is caught
        power_up: Fixed sub-effect, or None to choose one at catch time
        color: Fallback RGB fill while the image is missing or loading
        image: Image path, relative to the registry file
    """
    name: str
    role: KindRole
    weight: float = Field(default=1.0, ge=0)
    points: int = Field(default=0, ge=0)
    life_penalty: int = Field(default=0, ge=0)
    score_penalty: int = Field(default=0, ge=0)
    power_up: Optional[PowerUpVariant] = None
    color: Color = Color(r=200, g=200, b=200)
    image: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode='after')
    def validate_role_fields(self) -> 'KindSpec':
        if self.power_up is not None and self.role != KindRole.POWER_UP:
            raise ValueError(f"Kind '{self.name}' sets power_up but has role {self.role.value}")
        return self

    @property
    def is_beneficial(self) -> bool:
        return self.role == KindRole.BENEFICIAL

    @property
    def is_harmful(self) -> bool:
        return self.role == KindRole.HARMFUL

    @property
    def is_power_up(self) -> bool:
        return self.role == KindRole.POWER_UP


class KindRegistry:
    """Ordered, read-only collection of kinds.

    Registry order is the order thresholds are laid out in, which keeps
    kind selection deterministic for a seeded random source.
    """

    def __init__(self, kinds: List[KindSpec], base_dir: Optional[Path] = None):
        """
        Args:
            kinds: Kinds in registry order
            base_dir: Directory image paths are relative to

        Raises:
            InvalidConfigurationError: Duplicate names or no spawnable beneficial kind
        """
        self._kinds: Dict[str, KindSpec] = {}
        for kind in kinds:
            if kind.name in self._kinds:
                raise InvalidConfigurationError(f"Duplicate kind '{kind.name}'")
            self._kinds[kind.name] = kind
        if not any(k.is_beneficial and k.weight > 0 for k in self._kinds.values()):
            raise InvalidConfigurationError('Kind registry needs at least one spawnable beneficial kind')
        self.base_dir = base_dir or Path('.')

    def __getitem__(self, name: str) -> KindSpec:
        return self._kinds[name]

    def __contains__(self, name: str) -> bool:
        return name in self._kinds

    def __iter__(self) -> Iterator[KindSpec]:
        return iter(self._kinds.values())

    def __len__(self) -> int:
        return len(self._kinds)

    @property
    def names(self) -> List[str]:
        return list(self._kinds)

    def by_role(self, role: KindRole) -> List[KindSpec]:
        """Kinds with the given role, in registry order."""
        return [k for k in self._kinds.values() if k.role == role]

    def image_path(self, name: str) -> Optional[Path]:
        """Absolute image path for a kind, or None if it has no image."""
        image = self._kinds[name].image
        if not image:
            return None
        path = Path(image)
        if not path.is_absolute():
            path = self.base_dir / path
        return path


def parse_kind_registry(data: dict, base_dir: Optional[Path] = None) -> KindRegistry:
    """Build a registry from already-parsed YAML data.

    Args:
        data: Mapping with a 'kinds' key of name -> kind fields
        base_dir: Directory image paths are relative to

    Raises:
        InvalidConfigurationError: Malformed data
    """
    if not isinstance(data, dict) or not isinstance(data.get('kinds'), dict):
        raise InvalidConfigurationError("Kind registry must have a 'kinds' mapping")

    kinds = []
    for name, fields in data['kinds'].items():
        try:
            kinds.append(KindSpec(name=name, **(fields or {})))
        except (ValidationError, TypeError) as e:
            raise InvalidConfigurationError(f"Invalid kind '{name}': {e}") from e

    return KindRegistry(kinds, base_dir=base_dir)


def load_kind_registry(path: Optional[Path] = None) -> KindRegistry:
    """Load a kind registry from YAML.

    Args:
        path: YAML file (default: kinds.yaml next to this module)

    Raises:
        InvalidConfigurationError: File missing, unparsable or invalid
    """
    path = Path(path) if path else DEFAULT_KINDS_FILE
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise InvalidConfigurationError(f"Cannot read kind registry {path}: {e}") from e

    registry = parse_kind_registry(data, base_dir=path.parent)
    log.debug("Loaded %d kinds from %s: %s", len(registry), path, ", ".join(registry.names))
    return registry
