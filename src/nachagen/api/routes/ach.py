"""ACH rendering and publishing endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from nachagen.api.schemas import NachaFileIn, PublishRequest, PublishResponse
from nachagen.core.protocols import IFileStore
from nachagen.services.publisher import AchFilePublisher

router = APIRouter(tags=["ach"])


def get_file_store(request: Request) -> IFileStore:
    return request.app.state.file_store


@router.post("/render", response_class=PlainTextResponse)
async def render_file(body: NachaFileIn) -> str:
    """Return the NACHA text for the described file."""
    return body.to_domain().render()


# Plain ``def``: file stores block on network I/O, so FastAPI runs this in its threadpool.
@router.post("/publish")
def publish_file(
    body: PublishRequest,
    request: Request,
    file_store: IFileStore = Depends(get_file_store),
) -> PublishResponse:
    """Render the file and store it; returns the stored key and record counts."""
    publisher = AchFilePublisher(file_store=file_store, settings=request.app.state.settings)
    published = publisher.publish(
        body.file.to_domain(), filename=body.filename, overwrite=body.overwrite,
    )
    return PublishResponse(**published._asdict())
