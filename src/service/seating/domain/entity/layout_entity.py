from datetime import datetime
from typing import List, Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.seating.domain.enum.layout_kind import LayoutKind
from src.service.seating.domain.value_object.floor_spec import FloorSpec


def _validate_non_empty_string(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not value or not value.strip():
        raise ValueError(f'Layout {attribute.name} cannot be empty')


@attrs.define
class LayoutEntity:
    """
    Template or instance seat map header.

    Units and zones live in their own stores keyed by layout id. `version`
    is bumped on every persisted change and checked on write.
    """

    name: str = attrs.field(validator=_validate_non_empty_string)
    kind: LayoutKind
    floor_specs: List[FloorSpec] = attrs.field(factory=list)
    description: Optional[str] = None
    template_id: Optional[int] = None
    total_seats: int = 0
    is_customized: bool = False
    version: int = 0
    active: bool = True
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def num_floors(self) -> int:
        return len(self.floor_specs)

    @property
    def is_template(self) -> bool:
        return self.kind is LayoutKind.TEMPLATE

    @property
    def is_instance(self) -> bool:
        return self.kind is LayoutKind.INSTANCE

    def floor_spec(self, floor_number: int) -> Optional[FloorSpec]:
        for spec in self.floor_specs:
            if spec.floor_number == floor_number:
                return spec
        return None

    @classmethod
    def create_template(
        cls,
        *,
        name: str,
        floor_specs: List[FloorSpec],
        description: Optional[str] = None,
        total_seats: int = 0,
    ) -> 'LayoutEntity':
        return cls(
            name=name,
            kind=LayoutKind.TEMPLATE,
            floor_specs=sorted(floor_specs, key=lambda spec: spec.floor_number),
            description=description,
            total_seats=total_seats,
        )

    @classmethod
    def create_instance(
        cls, *, template: 'LayoutEntity', name: str, description: Optional[str] = None
    ) -> 'LayoutEntity':
        if not template.is_template:
            raise DomainError(f'Layout {template.id} is not a template')
        return cls(
            name=name,
            kind=LayoutKind.INSTANCE,
            floor_specs=list(template.floor_specs),
            description=description if description is not None else template.description,
            template_id=template.id,
            total_seats=template.total_seats,
            is_customized=False,
        )

    def mark_customized(self) -> None:
        """One-way: only reset_customization clears it."""
        if self.is_instance:
            self.is_customized = True

    def reset_customization(self) -> None:
        if not self.is_instance:
            raise DomainError(f'Layout {self.id} is not an instance')
        self.is_customized = False
