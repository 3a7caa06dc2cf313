# api_server.py

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Body, FastAPI, HTTPException, Query
from pydantic import BaseModel

from randompeople.orchestrator import RequestOrchestrator
from randompeople.transformations import render_page


class FilterChange(BaseModel):  # what the gender / country <select> sends on change
    field: str
    value: Optional[str] = None


def create_app(orchestrator: Optional[RequestOrchestrator] = None) -> FastAPI:
    orchestrator = orchestrator or RequestOrchestrator()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if orchestrator.settings.autoload:
            orchestrator.load()  # first fetch on startup, default filter
        yield
        await orchestrator.shutdown()  # a fetch still in flight is cancelled, not left pending

    app = FastAPI(  # API metadata
        title="Random People Service",
        description="Fetch random people with requests and urllib and compare response times.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.orchestrator = orchestrator

    @app.get("/health")  # health check for load balancers / uptime monitors
    def health():
        return {"status": "ok"}

    @app.get("/people")
    async def people():  # on the loop, so it never reads between two slot writes
        """Current page: settings, busy flag, error and both result sections."""
        return render_page(orchestrator.snapshot())

    @app.post("/people/requests")
    async def fetch_requests():
        # while busy this returns the current page untouched (the button is disabled)
        await orchestrator.fetch_via_requests()
        return render_page(orchestrator.snapshot())

    @app.post("/people/urllib")
    async def fetch_urllib():
        await orchestrator.fetch_via_urllib()
        return render_page(orchestrator.snapshot())

    @app.post("/people/both")
    async def fetch_both():
        """Run both clients together and return the page with the shared timing."""
        await orchestrator.fetch_both()
        return render_page(orchestrator.snapshot())

    @app.put("/filter")
    async def change_filter(
        change: Optional[FilterChange] = Body(None),
        field: Optional[str] = Query(None),
        value: Optional[str] = Query(None),
    ):
        # JSON body from the form, or ?field=country&value=FR
        if change is None:
            if field is None:
                raise HTTPException(status_code=422, detail="filter field is required")
            change = FilterChange(field=field, value=value)
        try:
            task = orchestrator.on_filter_change(change.field, change.value)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        page = render_page(orchestrator.snapshot())
        page["refetch_scheduled"] = task is not None
        return page

    return app


app = create_app()
