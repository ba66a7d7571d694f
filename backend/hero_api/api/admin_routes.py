import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from hero_api.api.auth import require_admin
from hero_api.api.dependencies import get_hero_repository, get_provisioning_controller
from hero_api.api.serializers import serialize
from hero_api.db.models import User
from hero_api.provisioning import HeroProvisioningController, ProvisioningState
from hero_api.repository.heroes import SqlHeroRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/heroes", tags=["admin"])


def invalid_input(errors: list) -> JSONResponse:
    return JSONResponse(status_code=400, content={"message": "Invalid input", "errors": errors})


@router.post("/create")
@router.post("", include_in_schema=False)
async def create_hero(
    request: Request,
    admin: User = Depends(require_admin),
    controller: HeroProvisioningController = Depends(get_provisioning_controller),
):
    # body is read only after require_admin has accepted the caller
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return invalid_input([{"field": "body", "reason": "Invalid JSON"}])

    try:
        context = await run_in_threadpool(controller.run, payload)
    except Exception:
        logger.exception("Error creating hero")
        return JSONResponse(status_code=500, content={"message": "Failed to create hero"})

    if context.state == ProvisioningState.REJECTED:
        return invalid_input([e.to_dict() for e in context.errors])

    body = serialize(context.hero)
    if context.state == ProvisioningState.COMPLETED:
        body["message"] = "Hero created successfully with custom Ollama model"
    else:
        body["warning"] = context.warning

    return JSONResponse(status_code=201, content=body)


@router.get("")
def list_heroes(
    admin: User = Depends(require_admin),
    repository: SqlHeroRepository = Depends(get_hero_repository),
):
    # admin console shows the newest heroes first
    return serialize(repository.list(newest_first=True))
