"""
REST endpoints for managing cars.

Bodies go through `core.jsonio` rather than FastAPI's own JSON handling so
`age` is never rounded through a float.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Path, Request, Response, status

from auth import dependencies as auth_dependencies
from core import headers, jsonio, pagination
from core.db import BIGINT_MAX, BIGINT_MIN

from . import repository, schemas, service
from .entity import Car

logger = logging.getLogger(__name__)

ENTITY_API_URL = "/api/cars"

CarId = Path(ge=BIGINT_MIN, le=BIGINT_MAX)

router = APIRouter()


def _car_response(
    car: Car,
    *,
    status_code: int = status.HTTP_200_OK,
    extra_headers: dict[str, str] | None = None,
) -> jsonio.ExactJSONResponse:
    return jsonio.ExactJSONResponse(
        content=schemas.CarBody.from_entity(car).to_json_dict(),
        status_code=status_code,
        headers=extra_headers,
    )


@router.post(ENTITY_API_URL, status_code=status.HTTP_201_CREATED, response_model=schemas.CarBody)
async def create_car(
    body: schemas.CarBody = Depends(jsonio.json_body(schemas.CarBody)),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> Response:
    """
    Create a new car. 400 if the body already carries an id.
    """
    logger.debug("REST request to save Car : %s", body)
    car = await service.create_car(body)
    return _car_response(
        car,
        status_code=status.HTTP_201_CREATED,
        extra_headers={
            "Location": f"{ENTITY_API_URL}/{car.id}",
            **headers.entity_creation_alert(service.ENTITY_NAME, str(car.id)),
        },
    )


@router.put(ENTITY_API_URL + "/{car_id}", response_model=schemas.CarBody)
async def update_car(
    car_id: int = CarId,
    body: schemas.CarBody = Depends(jsonio.json_body(schemas.CarBody)),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> Response:
    """
    Replace an existing car. Fields missing from the body are cleared.
    """
    logger.debug("REST request to update Car : %s, %s", car_id, body)
    car = await service.update_car(car_id, body)
    return _car_response(car, extra_headers=headers.entity_update_alert(service.ENTITY_NAME, str(car.id)))


@router.patch(ENTITY_API_URL + "/{car_id}", response_model=schemas.CarBody)
async def partial_update_car(
    car_id: int = CarId,
    body: schemas.CarBody = Depends(jsonio.json_body(schemas.CarBody)),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> Response:
    """
    Update the given fields of an existing car; null or missing fields are left as they are.

    Accepts `application/json` and `application/merge-patch+json`.
    """
    logger.debug("REST request to partial update Car partially : %s, %s", car_id, body)
    car = await service.partial_update_car(car_id, body)
    return _car_response(car, extra_headers=headers.entity_update_alert(service.ENTITY_NAME, str(car.id)))


@router.get(ENTITY_API_URL, response_model=list[schemas.CarBody])
async def get_all_cars(
    request: Request,
    page_request: pagination.PageRequest = Depends(pagination.pageable(repository.SORTABLE_COLUMNS)),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> Response:
    logger.debug("REST request to get a page of Cars")
    cars, total = await service.list_cars(page_request)
    return jsonio.ExactJSONResponse(
        content=[schemas.CarBody.from_entity(car).to_json_dict() for car in cars],
        headers=pagination.pagination_headers(request.url, page_request=page_request, total=total),
    )


@router.get(ENTITY_API_URL + "/{car_id}", response_model=schemas.CarBody)
async def get_car(
    car_id: int = CarId,
    _: dict = Depends(auth_dependencies.get_current_user),
) -> Response:
    logger.debug("REST request to get Car : %s", car_id)
    car = await service.get_car(car_id)
    return _car_response(car)


@router.delete(ENTITY_API_URL + "/{car_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_car(
    car_id: int = CarId,
    _: dict = Depends(auth_dependencies.get_current_user),
) -> Response:
    """
    Delete a car by id. Always 204, whether or not it existed.
    """
    logger.debug("REST request to delete Car : %s", car_id)
    await service.delete_car(car_id)
    return Response(
        status_code=status.HTTP_204_NO_CONTENT,
        headers=headers.entity_deletion_alert(service.ENTITY_NAME, str(car_id)),
    )
