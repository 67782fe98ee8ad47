from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.service.seating.domain.entity.layout_entity import LayoutEntity
from src.service.seating.domain.entity.positioned_unit_entity import PositionedUnitEntity
from src.service.seating.domain.entity.zone_entity import ZoneEntity
from src.service.seating.domain.enum.seat_type import SeatType
from src.service.seating.domain.enum.space_kind import SpaceKind
from src.service.seating.domain.value_object.floor_spec import FloorSpec
from src.service.seating.domain.value_object.unit_target import (
    SEAT_NUMBER_MAX_LENGTH,
    UnitTarget,
)


class CamelModel(BaseModel):
    """Wire format is camelCase; snake_case is accepted on input too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================ Shared parts ============================


class FloorSpecSchema(CamelModel):
    floor_number: int
    num_rows: int
    seats_left: int
    seats_right: int

    def to_value(self) -> FloorSpec:
        return FloorSpec(
            floor_number=self.floor_number,
            num_rows=self.num_rows,
            seats_left=self.seats_left,
            seats_right=self.seats_right,
        )

    @classmethod
    def from_value(cls, spec: FloorSpec) -> 'FloorSpecSchema':
        return cls(
            floor_number=spec.floor_number,
            num_rows=spec.num_rows,
            seats_left=spec.seats_left,
            seats_right=spec.seats_right,
        )


class PositionSchema(CamelModel):
    x: int
    y: int


# ============================ Layouts ============================


class TemplateCreateRequest(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            'example': {
                'name': 'Coach 45 - single deck',
                'description': 'Standard 2+2 layout',
                'floorSpecs': [{'floorNumber': 1, 'numRows': 4, 'seatsLeft': 2, 'seatsRight': 2}],
            }
        },
    )

    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    floor_specs: List[FloorSpecSchema]


class TemplateUpdateRequest(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    floor_specs: Optional[List[FloorSpecSchema]] = None
    regenerate_units: bool = False
    expected_version: Optional[int] = None


class InstanceCreateRequest(CamelModel):
    template_id: int
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None


class InstanceUpdateRequest(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None


class LayoutResponse(CamelModel):
    id: int
    name: str
    kind: str
    description: Optional[str] = None
    template_id: Optional[int] = None
    num_floors: int
    floor_specs: List[FloorSpecSchema]
    total_seats: int
    is_customized: bool
    version: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, layout: LayoutEntity) -> 'LayoutResponse':
        if layout.id is None:
            raise ValueError('Layout ID should not be None after persistence.')
        return cls(
            id=layout.id,
            name=layout.name,
            kind=layout.kind.value,
            description=layout.description,
            template_id=layout.template_id,
            num_floors=layout.num_floors,
            floor_specs=[FloorSpecSchema.from_value(spec) for spec in layout.floor_specs],
            total_seats=layout.total_seats,
            is_customized=layout.is_customized,
            version=layout.version,
            created_at=layout.created_at,
            updated_at=layout.updated_at,
        )


# ============================ Units ============================


class UnitTargetSchema(CamelModel):
    floor_number: int
    position: PositionSchema
    space_kind: SpaceKind = SpaceKind.SEAT
    seat_number: Optional[str] = Field(default=None, max_length=SEAT_NUMBER_MAX_LENGTH)
    seat_type: Optional[SeatType] = None
    amenities: List[str] = []
    meta: Optional[Dict[str, Any]] = None

    def to_value(self) -> UnitTarget:
        return UnitTarget(
            floor_number=self.floor_number,
            x=self.position.x,
            y=self.position.y,
            space_kind=self.space_kind,
            seat_number=self.seat_number,
            seat_type=self.seat_type,
            amenities=list(self.amenities),
            meta=self.meta,
        )


class ReconcileUnitsRequest(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            'example': {
                'expectedVersion': 1,
                'units': [
                    {'floorNumber': 1, 'position': {'x': 0, 'y': 1}, 'seatNumber': '2'},
                    {'floorNumber': 1, 'position': {'x': 1, 'y': 1}, 'seatNumber': '1'},
                    {'floorNumber': 1, 'position': {'x': 2, 'y': 1}, 'spaceKind': 'hallway'},
                ],
            }
        },
    )

    units: List[UnitTargetSchema]
    expected_version: Optional[int] = None


class ReconciliationResponse(CamelModel):
    created: int
    updated: int
    deactivated: int
    total_active_seats: int


class UnitResponse(CamelModel):
    id: int
    layout_id: int
    floor_number: int
    position: PositionSchema
    space_kind: SpaceKind
    seat_number: Optional[str] = None
    seat_type: Optional[SeatType] = None
    amenities: List[str]
    meta: Dict[str, Any]
    active: bool

    @classmethod
    def from_entity(cls, unit: PositionedUnitEntity) -> 'UnitResponse':
        if unit.id is None or unit.layout_id is None:
            raise ValueError('Unit ID should not be None after persistence.')
        return cls(
            id=unit.id,
            layout_id=unit.layout_id,
            floor_number=unit.floor_number,
            position=PositionSchema(x=unit.position_x, y=unit.position_y),
            space_kind=unit.space_kind,
            seat_number=unit.seat_number,
            seat_type=unit.seat_type,
            amenities=list(unit.amenities),
            meta=dict(unit.meta),
            active=unit.active,
        )


# ============================ Zones ============================


class ZoneSchema(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    row_numbers: List[int]
    price_multiplier: float = Field(default=1.0, ge=0)

    def to_entity(self) -> ZoneEntity:
        return ZoneEntity(
            name=self.name,
            row_numbers=list(self.row_numbers),
            price_multiplier=self.price_multiplier,
        )


class ReplaceZonesRequest(CamelModel):
    zones: List[ZoneSchema]
    expected_version: Optional[int] = None


class ZoneResponse(ZoneSchema):
    id: int
    layout_id: int

    @classmethod
    def from_entity(cls, zone: ZoneEntity) -> 'ZoneResponse':
        if zone.id is None or zone.layout_id is None:
            raise ValueError('Zone ID should not be None after persistence.')
        return cls(
            id=zone.id,
            layout_id=zone.layout_id,
            name=zone.name,
            row_numbers=list(zone.row_numbers),
            price_multiplier=zone.price_multiplier,
        )


# ============================ Propagation ============================


class InstanceSyncSummaryResponse(CamelModel):
    instance_id: int
    created: int
    updated: int
    deleted: int


class InstanceSyncFailureResponse(CamelModel):
    instance_id: int
    error: str


class PropagationResponse(CamelModel):
    template_id: int
    summaries: List[InstanceSyncSummaryResponse]
    failures: List[InstanceSyncFailureResponse]
    skipped_customized: int


class TemplateUpdateResponse(CamelModel):
    template: LayoutResponse
    regeneration: Optional[ReconciliationResponse] = None
