"""Tests for skill catalog resolution."""

import pytest

from superpowers.core import (
    AgentConfig,
    AgentNotFoundError,
    Script,
    SkillCatalog,
    SkillCatalogResolver,
    Superpower,
)
from superpowers.store import InMemoryRecordStore


class TestSkillCatalog:
    def test_from_skills_collects_tools_and_scripts(self, agent_config, scheduler_skill, fetcher_skill):
        catalog = SkillCatalog.from_skills(agent_config, [scheduler_skill, fetcher_skill])

        assert catalog.tool_ids == ("run_script", "http_call", "query_files")
        assert catalog.script_names == ["bookAppointment"]
        assert catalog.skill_names == ["Appointment Scheduler", "HTTP Fetcher"]
        assert catalog.agent_id == "agent-1"

    def test_later_script_wins(self, agent_config):
        first = Superpower(id="a", name="A", scripts=(Script("greet", "def main(p): return 1"),))
        second = Superpower(id="b", name="B", scripts=(Script("greet", "def main(p): return 2"),))

        catalog = SkillCatalog.from_skills(agent_config, [first, second])

        assert catalog.scripts["greet"] == "def main(p): return 2"

    def test_skips_scripts_without_name_or_content(self, agent_config):
        skill = Superpower(
            id="a",
            name="A",
            scripts=(Script("", "def main(p): pass"), Script("empty", ""), Script("ok", "x = 1")),
        )

        catalog = SkillCatalog.from_skills(agent_config, [skill])

        assert catalog.script_names == ["ok"]

    def test_scripts_are_read_only(self, agent_config, scheduler_skill):
        catalog = SkillCatalog.from_skills(agent_config, [scheduler_skill])

        with pytest.raises(TypeError):
            catalog.scripts["other"] = "x"  # type: ignore[index]

    def test_discards_unusable_tool_entries(self, agent_config):
        skill = Superpower(id="a", name="A", tools=(None, "", "  ", "http_call"))

        catalog = SkillCatalog.from_skills(agent_config, [skill])

        assert catalog.tool_ids == ("http_call",)


class TestSkillCatalogResolver:
    @pytest.mark.asyncio
    async def test_resolves_agent_skills(self, record_store):
        catalog = await SkillCatalogResolver(record_store).resolve("agent-1")

        assert catalog.agent.name == "Receptionist"
        # Store order is by name
        assert catalog.skill_names == ["Appointment Scheduler", "HTTP Fetcher"]
        assert "bookAppointment" in catalog.scripts

    @pytest.mark.asyncio
    async def test_agent_without_superpowers(self, record_store):
        catalog = await SkillCatalogResolver(record_store).resolve("agent-bare")

        assert catalog.skills == ()
        assert catalog.tool_ids == ()
        assert dict(catalog.scripts) == {}

    @pytest.mark.asyncio
    async def test_unknown_agent_raises(self, record_store):
        with pytest.raises(AgentNotFoundError, match="Agent not found: nope"):
            await SkillCatalogResolver(record_store).resolve("nope")

    @pytest.mark.asyncio
    async def test_ignores_dangling_and_duplicate_references(self, scheduler_skill):
        store = InMemoryRecordStore()
        store.add_superpower(scheduler_skill)
        store.add_agent(
            AgentConfig(
                id="a",
                name="A",
                superpower_ids=("sp-scheduler", "missing", "sp-scheduler"),
            )
        )

        catalog = await SkillCatalogResolver(store).resolve("a")

        assert catalog.skill_names == ["Appointment Scheduler"]

    @pytest.mark.asyncio
    async def test_only_referenced_skills(self, record_store):
        record_store.add_superpower(Superpower(id="sp-other", name="Other", tools=("query_db",)))

        catalog = await SkillCatalogResolver(record_store).resolve("agent-1")

        assert "Other" not in catalog.skill_names
        assert "query_db" not in catalog.tool_ids
