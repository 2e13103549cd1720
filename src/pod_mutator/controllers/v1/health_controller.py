from fastapi import APIRouter
from fastapi_router_controller import Controller

router = APIRouter()
controller = Controller(router, openapi_tag={"name": "Health Api"})


@controller.use()
@controller.resource()
class HealthController:
    @controller.route.get("/healthz", summary="Liveness and readiness probe")
    async def healthz(self) -> dict[str, str]:
        return {"status": "ok"}
