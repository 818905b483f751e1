"""
Construction options for an incremental Merkle tree.

A tree is configured with a hash function, an arity and a growth mode. The
growth mode is a tagged variant:

- `Fixed(depth)`: the depth is chosen up front and never changes. The tree
  holds at most `arity ** depth` leaves.
- `Dynamic(initial_leaves)`: the depth starts at 1 and grows by one level
  whenever the leaves no longer fit. Optional initial leaves are loaded in a
  single bottom-up pass.

All models are frozen. Validation failures surface as pydantic
`ValidationError`; the tree translates them into `InvalidParameterError`.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator
from typing_extensions import Final

from .types.node import HashFunction

MAX_DEPTH: Final = 32
"""The largest depth a fixed tree may be configured with."""

DEFAULT_ARITY: Final = 2
"""The number of children combined by one hash invocation, unless configured."""


class Fixed(BaseModel):
    """A tree whose depth, and therefore capacity, is set at construction."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["fixed"] = "fixed"

    depth: StrictInt = Field(ge=1, le=MAX_DEPTH)
    """The number of levels above the leaves."""


class Dynamic(BaseModel):
    """A tree whose depth grows with the number of leaves."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["dynamic"] = "dynamic"

    initial_leaves: tuple[Any, ...] = ()
    """Leaves to load at construction, in insertion order."""


GrowthMode = Annotated[Fixed | Dynamic, Field(discriminator="kind")]
"""Either growth mode, discriminated on its `kind` tag."""


class TreeConfig(BaseModel):
    """The full set of options a tree is built from."""

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    hash_function: HashFunction
    """Combines an ordered group of children into their parent."""

    growth: GrowthMode = Field(default_factory=Dynamic)
    """How the depth of the tree is determined."""

    arity: StrictInt = Field(default=DEFAULT_ARITY, ge=2)
    """The number of children per internal node."""

    @field_validator("hash_function", mode="before")
    @classmethod
    def require_callable(cls, value: Any) -> Any:
        """Reject hash functions that cannot be called."""
        if not callable(value):
            raise ValueError("hash_function must be callable")
        return value
