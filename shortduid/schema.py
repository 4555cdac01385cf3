from pydantic import BaseModel, Field


class DUIDBatch(BaseModel):
    """Response model for a batch of generated DUIDs.

    Args:
        shard_id (int): Shard identity of the issuing generator.
        count (int): Number of IDs actually issued.
        ids (list[str]): Generated IDs, short-encoded or decimal strings.
    """

    shard_id: int = Field(..., description="Shard identity of the generator", examples=[123])
    count: int = Field(..., description="Number of IDs issued", examples=[2])
    ids: list[str] = Field(
        ...,
        description=(
            "Generated IDs in issuance order. Integer IDs are rendered as decimal"
            " strings so that no precision is lost in JSON clients."
        ),
        examples=[["6vZ3fQm1b2X", "6vZ3fQm1b3k"]],
    )


class GeneratorInfo(BaseModel):
    """Response model describing the running generator.

    Args:
        shard_id (int): Shard identity after truncation.
        epoch_start (int): Epoch origin in milliseconds.
        current_time_ms (int): Wall clock with drift applied.
    """

    shard_id: int = Field(..., description="Shard identity", examples=[123])
    epoch_start: int = Field(..., description="Epoch origin in ms", examples=[1433116800000])
    current_time_ms: int = Field(..., description="Generator clock in ms")


class DUIDFields(BaseModel):
    """Response model for a decomposed integer DUID.

    Args:
        duid (str): The integer DUID as a decimal string.
        virtual_time (int): Milliseconds since the generator epoch.
        shard_id (int): Shard identity embedded in the ID.
        sequence (int): Sequence number within the virtual millisecond.
        issued_at_ms (int): Unix time in ms, assuming this generator's epoch.
    """

    duid: str = Field(..., description="Integer DUID as a decimal string")
    virtual_time: int = Field(..., description="Milliseconds since the epoch")
    shard_id: int = Field(..., description="Shard identity")
    sequence: int = Field(..., description="Sequence number")
    issued_at_ms: int = Field(..., description="Unix time in ms of the virtual tick")
