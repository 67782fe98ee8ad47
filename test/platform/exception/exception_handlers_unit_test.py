"""Unit tests for the HTTP exception handlers"""

import json

from fastapi.exceptions import RequestValidationError
import pytest

from src.platform.exception.exception_handlers import (
    custom_error_handler,
    general_500_exception_handler,
    payload_validation_error_handler,
    validation_error_handler,
)
from src.platform.exception.exceptions import (
    ConflictError,
    NotFoundError,
    PayloadValidationError,
)


pytestmark = pytest.mark.unit


def _body(response) -> dict:
    return json.loads(response.body)


class TestExceptionHandlers:
    async def test_payload_error_carries_structured_detail(self):
        error = PayloadValidationError(
            'floorNumber=3 is out of range, valid range [1,2]',
            field='floorNumber',
            code='FLOOR_OUT_OF_RANGE',
            value=3,
            valid_range=(1, 2),
        )

        response = await payload_validation_error_handler(None, error)  # type: ignore[arg-type]

        assert response.status_code == 400
        assert _body(response) == {
            'detail': 'floorNumber=3 is out of range, valid range [1,2]',
            'error': {
                'field': 'floorNumber',
                'code': 'FLOOR_OUT_OF_RANGE',
                'value': 3,
                'valid_range': [1, 2],
            },
        }

    @pytest.mark.parametrize(
        'error,status_code',
        [
            (NotFoundError('Layout not found: 9'), 404),
            (ConflictError('Layout 1 is at version 2, expected 1'), 409),
        ],
    )
    async def test_custom_errors_map_to_their_status(self, error, status_code):
        response = await custom_error_handler(None, error)  # type: ignore[arg-type]

        assert response.status_code == status_code
        assert _body(response) == {'detail': error.message}

    async def test_request_validation_is_400(self):
        error = RequestValidationError(
            [{'type': 'missing', 'loc': ('body', 'floorSpecs'), 'msg': 'Field required'}]
        )

        response = await validation_error_handler(None, error)  # type: ignore[arg-type]

        assert response.status_code == 400
        assert _body(response)['detail'][0]['loc'] == ['body', 'floorSpecs']

    async def test_unexpected_error_hides_details(self):
        error = RuntimeError('secret')

        response = await general_500_exception_handler(None, error)  # type: ignore[arg-type]

        assert response.status_code == 500
        assert _body(response) == {'detail': 'Internal server error'}
