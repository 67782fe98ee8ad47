"""
Payload validation for layout operations.

Every check runs before storage is touched and raises PayloadValidationError
naming the wire field, a code, the offending value and, for range errors,
the inclusive valid range. Field names follow the HTTP payload (camelCase).
"""

from typing import Dict, List, Sequence

from src.platform.exception.exceptions import PayloadValidationError
from src.service.seating.domain.entity.zone_entity import ZoneEntity
from src.service.seating.domain.value_object.floor_spec import FloorSpec
from src.service.seating.domain.value_object.position import Position
from src.service.seating.domain.value_object.unit_target import (
    SEAT_NUMBER_MAX_LENGTH,
    UnitTarget,
)


def validate_floor_specs(floor_specs: Sequence[FloorSpec]) -> None:
    """Floors must be numbered exactly 1..N with no gaps or repeats."""
    if not floor_specs:
        raise PayloadValidationError(
            'At least one floor is required',
            field='floorSpecs',
            code='INVALID_FLOOR_SPEC',
            value=0,
        )

    expected = list(range(1, len(floor_specs) + 1))
    actual = sorted(spec.floor_number for spec in floor_specs)
    if actual != expected:
        raise PayloadValidationError(
            f'Floor numbers must be 1..{len(floor_specs)}, got {actual}',
            field='floorNumber',
            code='INVALID_FLOOR_SPEC',
            value=actual,
            valid_range=(1, len(floor_specs)),
        )


def validate_unit_targets(
    targets: Sequence[UnitTarget], floor_specs: Sequence[FloorSpec]
) -> None:
    _validate_no_duplicates(targets)
    _validate_bounds(targets, floor_specs)


def _validate_no_duplicates(targets: Sequence[UnitTarget]) -> None:
    seen_positions: set[Position] = set()
    seen_seat_numbers: set[str] = set()

    for target in targets:
        if target.position in seen_positions:
            raise PayloadValidationError(
                f'Duplicate position {target.position} in target list',
                field='position',
                code='DUPLICATE_POSITION',
                value=str(target.position),
            )
        seen_positions.add(target.position)

        if not target.space_kind.is_seat:
            continue

        seat_number = target.normalized_seat_number
        if seat_number is None:
            raise PayloadValidationError(
                f'Seat at {target.position} requires a seat number',
                field='seatNumber',
                code='SEAT_NUMBER_REQUIRED',
                value=target.seat_number,
            )
        if len(seat_number) > SEAT_NUMBER_MAX_LENGTH:
            raise PayloadValidationError(
                f'Seat number "{seat_number}" is longer than '
                f'{SEAT_NUMBER_MAX_LENGTH} characters',
                field='seatNumber',
                code='SEAT_NUMBER_TOO_LONG',
                value=seat_number,
                valid_range=(1, SEAT_NUMBER_MAX_LENGTH),
            )
        if seat_number in seen_seat_numbers:
            raise PayloadValidationError(
                f'Duplicate seat number "{seat_number}" in target list',
                field='seatNumber',
                code='DUPLICATE_SEAT_NUMBER',
                value=seat_number,
            )
        seen_seat_numbers.add(seat_number)


def _validate_bounds(targets: Sequence[UnitTarget], floor_specs: Sequence[FloorSpec]) -> None:
    specs_by_floor: Dict[int, FloorSpec] = {spec.floor_number: spec for spec in floor_specs}
    floor_count = len(floor_specs)

    for target in targets:
        spec = specs_by_floor.get(target.floor_number)
        if spec is None:
            raise PayloadValidationError(
                f'floorNumber={target.floor_number} is out of range, '
                f'valid range [1,{floor_count}]',
                field='floorNumber',
                code='FLOOR_OUT_OF_RANGE',
                value=target.floor_number,
                valid_range=(1, floor_count),
            )
        if not 1 <= target.y <= spec.num_rows:
            raise PayloadValidationError(
                f'position.y={target.y} is out of range on floor {spec.floor_number}, '
                f'valid range [1,{spec.num_rows}]',
                field='position.y',
                code='ROW_OUT_OF_RANGE',
                value=target.y,
                valid_range=(1, spec.num_rows),
            )
        if not 0 <= target.x <= spec.max_x:
            raise PayloadValidationError(
                f'position.x={target.x} is out of range on floor {spec.floor_number}, '
                f'valid range [0,{spec.max_x}]',
                field='position.x',
                code='COLUMN_OUT_OF_RANGE',
                value=target.x,
                valid_range=(0, spec.max_x),
            )


def validate_zones(zones: Sequence[ZoneEntity]) -> List[ZoneEntity]:
    for zone in zones:
        if not zone.name or not zone.name.strip():
            raise PayloadValidationError(
                'Zone name cannot be empty',
                field='name',
                code='INVALID_ZONE',
                value=zone.name,
            )
        if zone.price_multiplier < 0:
            raise PayloadValidationError(
                f'Zone "{zone.name}" price multiplier cannot be negative, '
                f'got {zone.price_multiplier}',
                field='priceMultiplier',
                code='INVALID_ZONE',
                value=zone.price_multiplier,
            )
        invalid_rows = [row for row in zone.row_numbers if row < 1]
        if invalid_rows:
            raise PayloadValidationError(
                f'Zone "{zone.name}" has invalid row numbers {invalid_rows}',
                field='rowNumbers',
                code='INVALID_ZONE',
                value=invalid_rows,
            )
    return list(zones)
