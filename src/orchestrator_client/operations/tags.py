from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import StrictStr

from orchestrator_client.client import OrchestratorClient
from orchestrator_client.models import Instance, InstanceKey, Tag
from orchestrator_client.operations._paths import build_path


def _tag_query(name: str, value: Optional[str]) -> Dict[str, str]:
    return {"tag": f"{name}={value}" if value else name}


async def get_tagged(
    client: OrchestratorClient,
    name: Optional[str] = None,
    value: Optional[str] = None,
) -> List[Instance]:
    """
    Instances carrying a tag. `name` alone matches any value; with `value`
    only exact name=value pairs match. No name lists every tagged instance.
    """
    params = _tag_query(name, value) if name else None
    return await client.call(
        List[Instance], build_path("tagged"), params=params, op="tagged"
    )


async def get_instance_tags(client: OrchestratorClient, key: InstanceKey) -> List[Tag]:
    return await client.call(List[Tag], build_path("tags", key), op="tags")


async def get_instance_tag(client: OrchestratorClient, key: InstanceKey) -> List[Tag]:
    return await client.call(List[Tag], build_path("tag", key), op="tag")


async def get_tag_values(
    client: OrchestratorClient, key: InstanceKey
) -> Dict[str, str]:
    return await client.call(
        Dict[StrictStr, StrictStr], build_path("tag-value", key), op="tag_values"
    )


async def get_tag_value(client: OrchestratorClient, key: InstanceKey, name: str) -> str:
    """Single tag value; empty string when the server has nothing to say."""
    return await client.call_str(build_path("tag-value", key, name), op="tag_value")


async def tag_instance(
    client: OrchestratorClient,
    key: InstanceKey,
    name: str,
    value: Optional[str] = None,
) -> Instance:
    if value:
        return await client.call(
            Instance, build_path("tag", key, name, value), op="tag_instance"
        )
    return await client.call(
        Instance, build_path("tag", key), params={"tag": name}, op="tag_instance"
    )


async def untag_instance(
    client: OrchestratorClient, key: InstanceKey, name: Optional[str] = None
) -> Instance:
    """Remove one tag, or every tag when `name` is omitted."""
    return await client.call(
        Instance, build_path("untag", key, name), op="untag_instance"
    )


async def untag_all(
    client: OrchestratorClient,
    name: Optional[str] = None,
    value: Optional[str] = None,
) -> List[Instance]:
    if name and value:
        return await client.call(
            List[Instance], build_path("untag-all", name, value), op="untag_all"
        )
    params = {"tag": name} if name else None
    return await client.call(
        List[Instance], build_path("untag-all"), params=params, op="untag_all"
    )
