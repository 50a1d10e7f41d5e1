"""
Cloning of container create specifications.
"""
from typing import Optional

from ..MODELS.create_spec import CreateSpec


def clone_create_spec(create_spec: Optional[CreateSpec]) -> CreateSpec:
    """
    Returns an independent deep copy of a create specification, or a new empty
    one when none is given. Extra fields are copied along with modelled ones.

    :raises TypeError: If the value is not a CreateSpec.
    """
    if create_spec is None:
        return CreateSpec()
    if not isinstance(create_spec, CreateSpec):
        raise TypeError(f"Expected CreateSpec, got {type(create_spec).__name__}")
    return create_spec.model_copy(deep=True)
