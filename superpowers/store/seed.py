"""Default and file-based seed data."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from superpowers.core.records import Script
from superpowers.store.sql import SqlRecordStore

logger = logging.getLogger(__name__)


DEFAULT_SEED: dict[str, Any] = {
    "superpowers": [
        {
            "name": "HTTP Fetcher",
            "description": "Call external APIs via HTTP.",
            "content": "Uses http_call to perform curl-like requests and return responses.",
            "tools": ["http_call"],
            "scripts": [],
        }
    ],
    "agents": [
        {
            "name": "Researcher Bot",
            "base_prompt": "You are a helpful researcher. Use your superpower to answer questions.",
            "superpowers": ["HTTP Fetcher"],
        }
    ],
}


class SeedError(Exception):
    """Seed data is malformed."""


@dataclass
class SeedResult:
    skipped: bool = False
    superpowers: list[str] = field(default_factory=list)
    agents: list[str] = field(default_factory=list)


def load_seed_file(path: Path) -> dict[str, Any]:
    """Read seed data from a YAML file.

    Expected layout::

        superpowers:
          - name: Appointment Scheduler
            description: Books appointments on weekdays.
            content: Use run_script with bookAppointment.
            tools: [run_script]
            scripts:
              - name: bookAppointment
                content: |
                  def main(params): ...
        agents:
          - name: Receptionist
            base_prompt: You book appointments.
            superpowers: [Appointment Scheduler]

    Raises:
        SeedError: If the file is not a mapping of lists.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise SeedError(f"{path}: top level must be a mapping")
    for key in ("superpowers", "agents"):
        if not isinstance(data.get(key, []), list):
            raise SeedError(f"{path}: '{key}' must be a list")
    return data


async def seed_store(store: SqlRecordStore, data: dict[str, Any]) -> SeedResult:
    """Create the superpowers and agents in ``data``.

    Nothing is written when any superpower already exists. Agents refer to
    superpowers by name.

    Raises:
        SeedError: If an entry lacks a name or refers to an unknown superpower.
    """
    if await store.count_superpowers() > 0:
        logger.info("Default data already present, skipping seed")
        return SeedResult(skipped=True)

    result = SeedResult()
    ids_by_name: dict[str, str] = {}

    for entry in data.get("superpowers", []):
        if not entry.get("name"):
            raise SeedError(f"Superpower entry without a name: {entry!r}")
        superpower = await store.create_superpower(
            name=entry["name"],
            description=entry.get("description", ""),
            content=entry.get("content", ""),
            tools=entry.get("tools", []),
            scripts=[
                Script(name=s["name"], content=s["content"]) for s in entry.get("scripts", [])
            ],
        )
        ids_by_name[superpower.name] = superpower.id
        result.superpowers.append(superpower.name)

    for entry in data.get("agents", []):
        if not entry.get("name"):
            raise SeedError(f"Agent entry without a name: {entry!r}")
        names = entry.get("superpowers", [])
        unknown = [n for n in names if n not in ids_by_name]
        if unknown:
            raise SeedError(f"Agent {entry['name']!r} refers to unknown superpowers: {unknown}")
        agent = await store.create_agent(
            name=entry["name"],
            base_prompt=entry.get("base_prompt", ""),
            superpower_ids=[ids_by_name[n] for n in names],
        )
        result.agents.append(agent.name)

    return result
