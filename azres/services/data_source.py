"""
Read orchestration for the generic resource data source.

Builds the identifier, fetches the body through the client passed in the
ReadContext, then flattens the well-known fields and projects export paths.
"""
from dataclasses import dataclass
from datetime import timedelta
from typing import Iterable, List, Tuple

from azres.clients import ResourceClient
from azres.errors import AzresError, ResourceReadError
from azres.flatten.identity import flatten_identity
from azres.flatten.location import flatten_location
from azres.flatten.tags import flatten_tags
from azres.models import resource_id
from azres.models.state import DataSourceConfig, DataSourceState
from azres.projection import project, serialize

DEFAULT_READ_TIMEOUT = timedelta(minutes=5)


@dataclass
class ReadContext:
    client: ResourceClient
    timeout: timedelta = DEFAULT_READ_TIMEOUT


@dataclass
class ReadFailure:
    config: DataSourceConfig
    error: Exception

    def to_dict(self) -> dict:
        return {
            "label": self.config.label,
            "name": self.config.name,
            "source_file": self.config.source_file,
            "error": type(self.error).__name__,
            "message": str(self.error),
        }


def read(config: DataSourceConfig, ctx: ReadContext) -> DataSourceState:
    """
    Read one data source.

    Identifier errors and ResourceNotFound propagate unchanged; any other
    client failure is raised as ResourceReadError.
    """
    rid = resource_id.build(config.name, config.parent_id, config.type)

    try:
        body = ctx.client.get(rid.azure_resource_id, rid.api_version, timeout=ctx.timeout.total_seconds())
    except AzresError:
        raise
    except Exception as exc:
        raise ResourceReadError(f"reading {rid.id!r}: {exc}") from exc

    state = DataSourceState(
        id=rid.id,
        name=rid.name,
        parent_id=rid.parent_id,
        type=rid.type_and_version,
        label=config.label,
    )
    if isinstance(body, dict):
        state.tags = flatten_tags(body.get("tags"))
        state.location = flatten_location(body.get("location"))
        state.identity = flatten_identity(body.get("identity"))

    state.output = serialize(project(body, config.response_export_values))
    return state


def read_all(
    configs: Iterable[DataSourceConfig], ctx: ReadContext
) -> Tuple[List[DataSourceState], List[ReadFailure]]:
    """Read every config independently; one failure does not stop the rest."""
    states: List[DataSourceState] = []
    failures: List[ReadFailure] = []
    for config in configs:
        try:
            states.append(read(config, ctx))
        except AzresError as exc:
            failures.append(ReadFailure(config=config, error=exc))
    return states, failures
