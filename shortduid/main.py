"""
FastAPI DUID Generation Service

A thin HTTP wrapper around a single ShortDUID generator. Each process serves one
shard; run one process per shard ID to scale out.

Key Features:
    - Batch generation of short-encoded DUIDs
    - Batch generation of integer DUIDs, rendered as exact decimal strings
    - Generator introspection (shard, epoch, clock)
    - Decomposition of integer DUIDs into virtual time, shard and sequence
    - CORS middleware support for cross-origin requests

Generated IDs are not stored; persistence is left to the caller.
"""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Path, Query, Request, status
from fastapi.middleware.cors import CORSMiddleware

from shortduid.core.config import settings
from shortduid.core.exceptions import IdentifierOverflowError
from shortduid.schema import DUIDBatch, DUIDFields, GeneratorInfo
from shortduid.services.generator import ShortDUID
from shortduid.services.logger import setup_logger
from shortduid.utils.composer import ID_BITS, decompose

logger = setup_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Builds the shard's generator on startup and keeps it on ``app.state``.

    Args:
        app (FastAPI): The FastAPI application instance

    Yields:
        None: Control to the application during its lifetime
    """
    app.state.generator = ShortDUID.from_settings(settings)
    logger.info(
        "Starting DUID service for shard %s (env=%s)",
        app.state.generator.get_shard_id(),
        settings.ENV,
    )

    yield

    logger.info("Application is shutting down.")


def get_generator(request: Request) -> ShortDUID:
    return request.app.state.generator


app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _generate(generator: ShortDUID, count: int, as_int: bool) -> DUIDBatch:
    try:
        if as_int:
            ids = [str(duid) for duid in generator.get_duid_int(count)]
        else:
            ids = generator.get_duid(count)
    except IdentifierOverflowError as e:
        logger.error("DUID generation failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="DUID generation failed",
        )

    return DUIDBatch(shard_id=generator.get_shard_id(), count=len(ids), ids=ids)


@app.get(
    "/duid",
    response_model=DUIDBatch,
    summary="Generate short DUIDs",
    description="""
    Generate a batch of salt-encoded short DUIDs.

    IDs are unique per shard and strictly ordered by generation time within
    this process. Batches are capped at 8192 IDs per request.
    """,
)
async def create_duids(
    count: int = Query(1, ge=0, le=settings.MAX_BATCH_SIZE, description="Number of IDs"),
    generator: ShortDUID = Depends(get_generator),
):
    return _generate(generator, count, as_int=False)


@app.get(
    "/duid/int",
    response_model=DUIDBatch,
    summary="Generate integer DUIDs",
    description="""
    Generate a batch of 64-bit integer DUIDs.

    The integers are returned as decimal strings because many JSON clients
    cannot represent 64-bit integers exactly.
    """,
)
async def create_duid_ints(
    count: int = Query(1, ge=0, le=settings.MAX_BATCH_SIZE, description="Number of IDs"),
    generator: ShortDUID = Depends(get_generator),
):
    return _generate(generator, count, as_int=True)


@app.get("/info", response_model=GeneratorInfo, summary="Describe the generator")
async def get_info(generator: ShortDUID = Depends(get_generator)):
    return GeneratorInfo(
        shard_id=generator.get_shard_id(),
        epoch_start=generator.get_epoch_start(),
        current_time_ms=generator.get_current_time_ms(),
    )


@app.get(
    "/duid/int/{duid}/fields",
    response_model=DUIDFields,
    summary="Split an integer DUID into its fields",
)
async def get_duid_fields(
    duid: int = Path(..., ge=0, lt=1 << ID_BITS, description="Integer DUID"),
    generator: ShortDUID = Depends(get_generator),
):
    parts = decompose(duid)
    return DUIDFields(
        duid=str(duid),
        virtual_time=parts.virtual_time,
        shard_id=parts.shard_id,
        sequence=parts.sequence,
        issued_at_ms=generator.get_epoch_start() + parts.virtual_time,
    )
