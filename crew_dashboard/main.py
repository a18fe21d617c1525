from fastapi import FastAPI

from crew_dashboard.api.agents import router as agents_router
from crew_dashboard.api.execute import router as execute_router
from crew_dashboard.api.executions import router as executions_router
from crew_dashboard.api.files import router as files_router
from crew_dashboard.api.health import router as health_router
from crew_dashboard.api.metrics import router as metrics_router
from crew_dashboard.api.tasks import router as tasks_router
from crew_dashboard.api.templates import router as templates_router
from crew_dashboard.config import get_settings
from crew_dashboard.errors import unhandled_exception_handler
from crew_dashboard.observability.logging import configure_logging
from crew_dashboard.observability.metrics import get_monitor
from crew_dashboard.observability.middleware import PerformanceMiddleware
from crew_dashboard.services.storage import get_storage


app = FastAPI(title="Crew Dashboard", version="0.1.0")
app.add_middleware(PerformanceMiddleware, slow_request_ms=get_settings().slow_request_ms)
app.add_exception_handler(Exception, unhandled_exception_handler)

app.include_router(health_router)
app.include_router(metrics_router)
app.include_router(agents_router)
app.include_router(tasks_router)
app.include_router(templates_router)
app.include_router(executions_router)
app.include_router(files_router)
app.include_router(execute_router)


@app.on_event("startup")
def _startup() -> None:
    configure_logging()
    # Create the process-wide collector and store up front rather than on first request.
    get_monitor()
    get_storage()
