from typing import List

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.seating.app.command.reconcile_units_use_case import ReconcileUnitsUseCase
from src.service.seating.app.command.replace_zones_use_case import ReplaceZonesUseCase
from src.service.seating.app.query.list_layout_units_use_case import ListLayoutUnitsUseCase
from src.service.seating.app.query.list_layout_zones_use_case import ListLayoutZonesUseCase
from src.service.seating.driving_adapter.schema.layout_schema import (
    ReconcileUnitsRequest,
    ReconciliationResponse,
    ReplaceZonesRequest,
    UnitResponse,
    ZoneResponse,
)


router = APIRouter()


# ============================ Units ============================


@router.get('/{layout_id}/units', status_code=status.HTTP_200_OK)
@Logger.io(truncate_content=True)
async def list_layout_units(
    layout_id: int,
    use_case: ListLayoutUnitsUseCase = Depends(ListLayoutUnitsUseCase.depends),
) -> List[UnitResponse]:
    units = await use_case.list_units(layout_id=layout_id)
    return [UnitResponse.from_entity(unit) for unit in units]


@router.put('/{layout_id}/units', status_code=status.HTTP_200_OK)
@Logger.io(truncate_content=True)
async def reconcile_layout_units(
    layout_id: int,
    request: ReconcileUnitsRequest,
    use_case: ReconcileUnitsUseCase = Depends(ReconcileUnitsUseCase.depends),
) -> ReconciliationResponse:
    """
    Bring the layout's active units to exactly the given set.

    Units are matched by (floor, x, y); listed slots are created or
    overwritten in place, unlisted slots are deactivated. Editing an
    instance this way marks it customized.
    """
    result = await use_case.reconcile(
        layout_id=layout_id,
        targets=[unit.to_value() for unit in request.units],
        expected_version=request.expected_version,
    )
    return ReconciliationResponse(
        created=result.created,
        updated=result.updated,
        deactivated=result.deactivated,
        total_active_seats=result.total_active_seats,
    )


# ============================ Zones ============================


@router.get('/{layout_id}/zones', status_code=status.HTTP_200_OK)
@Logger.io
async def list_layout_zones(
    layout_id: int,
    use_case: ListLayoutZonesUseCase = Depends(ListLayoutZonesUseCase.depends),
) -> List[ZoneResponse]:
    zones = await use_case.list_zones(layout_id=layout_id)
    return [ZoneResponse.from_entity(zone) for zone in zones]


@router.put('/{layout_id}/zones', status_code=status.HTTP_200_OK)
@Logger.io
async def replace_layout_zones(
    layout_id: int,
    request: ReplaceZonesRequest,
    replace_use_case: ReplaceZonesUseCase = Depends(ReplaceZonesUseCase.depends),
    list_use_case: ListLayoutZonesUseCase = Depends(ListLayoutZonesUseCase.depends),
) -> List[ZoneResponse]:
    await replace_use_case.replace_zones(
        layout_id=layout_id,
        zones=[zone.to_entity() for zone in request.zones],
        expected_version=request.expected_version,
    )
    zones = await list_use_case.list_zones(layout_id=layout_id)
    return [ZoneResponse.from_entity(zone) for zone in zones]
