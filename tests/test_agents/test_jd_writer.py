"""Tests for JD drafting and title suggestion."""

from __future__ import annotations

import pytest

from recruit_copilot.agents.jd_writer import (
    DEFAULT_TITLE,
    MAX_EXISTING_JD_CHARS,
    MAX_REQUIREMENTS_CHARS,
    JDWriter,
    clean_title,
)


class TestCleanTitle:
    @pytest.mark.parametrize(
        "reply,expected",
        [
            ("Senior Data Engineer", "Senior Data Engineer"),
            ('"Senior Data Engineer"', "Senior Data Engineer"),
            ("\n\n1. Staff Backend Engineer\n2. Backend Lead", "Staff Backend Engineer"),
            ("- `Platform Engineer`", "Platform Engineer"),
            ("• 高级后端工程师", "高级后端工程师"),
            ("", ""),
        ],
    )
    def test_clean(self, reply, expected):
        assert clean_title(reply) == expected


class TestGenerate:
    async def test_draft(self, make_llm):
        llm, provider = make_llm("\n# Senior Data Engineer\n\n## Overview\nTBD\n")
        draft = await JDWriter(llm).generate(
            title="Senior Data Engineer", requirements="Spark, Airflow, 5 years"
        )

        assert draft == "# Senior Data Engineer\n\n## Overview\nTBD"
        assert provider.last_options.temperature == 0.4
        assert provider.last_messages[-1].content == (
            "Title: Senior Data Engineer\n\nRequirements and context:\nSpark, Airflow, 5 years"
        )

    async def test_inputs_are_truncated(self, make_llm):
        llm, provider = make_llm("# JD")
        await JDWriter(llm).generate(requirements="r" * 9000, job_description="j" * 9000)

        content = provider.last_messages[-1].content
        assert "r" * MAX_REQUIREMENTS_CHARS in content
        assert "r" * (MAX_REQUIREMENTS_CHARS + 1) not in content
        assert "Existing JD (revise and improve):\n" + "j" * MAX_EXISTING_JD_CHARS in content
        assert "j" * (MAX_EXISTING_JD_CHARS + 1) not in content

    async def test_selected_language(self, make_llm):
        llm, provider = make_llm("# Ingénieur")
        await JDWriter(llm).generate(title="Backend Engineer", language="fr-FR")
        assert provider.last_messages[0].content.startswith(
            "Veuillez répondre en français.\n\nUser selected language: French."
        )

    async def test_language_follows_existing_jd(self, make_llm, sample_chinese_jd):
        llm, provider = make_llm("# 高级后端工程师")
        await JDWriter(llm).generate(title="Backend Engineer", job_description=sample_chinese_jd)
        assert provider.last_messages[0].content.startswith("请使用中文回复。")

    async def test_empty_input_is_rejected(self, make_llm):
        llm, provider = make_llm()
        with pytest.raises(ValueError, match="required"):
            await JDWriter(llm).generate(title="  ")
        assert provider.calls == []


class TestSuggestTitle:
    async def test_suggest(self, make_llm):
        llm, provider = make_llm('"Senior Data Engineer"\nThis title reflects...')
        title = await JDWriter(llm).suggest_title(role="data eng", requirements="Spark")

        assert title == "Senior Data Engineer"
        assert provider.last_options.temperature == 0.2
        assert provider.last_messages[-1].content == "Role: data eng\n\nRequirements:\nSpark"

    async def test_empty_reply_falls_back_to_role(self, make_llm):
        llm, _ = make_llm("   \n - \n")
        assert await JDWriter(llm).suggest_title(role="Data Engineer") == "Data Engineer"

    async def test_empty_reply_without_role(self, make_llm):
        llm, _ = make_llm('""')
        assert await JDWriter(llm).suggest_title(requirements="Spark") == DEFAULT_TITLE
