"""Tests for the recruitment consultant chat agent."""

from __future__ import annotations

import pytest

from recruit_copilot.agents.consultant import (
    ACTION_MARKER,
    RecruitmentConsultant,
    build_user_message,
    extract_action,
    trim_history,
)
from recruit_copilot.config import ConsultantConfig
from recruit_copilot.models.chat import assistant, system, user
from recruit_copilot.models.consultant import RecruitmentChatContext, RecruitmentChatInput


class TestBuildUserMessage:
    def test_without_context(self):
        assert build_user_message("Hire a data engineer") == "Hire a data engineer"

    def test_empty_context(self):
        assert build_user_message("hi", RecruitmentChatContext()) == "hi"

    def test_labelled_lines_only_for_present_fields(self):
        context = RecruitmentChatContext(
            role="Data Engineer",
            seniority="Senior",
            employment_type="Full-time",
            must_haves=["Spark", "Airflow"],
            job_description="We need a data engineer.",
        )
        assert build_user_message("What am I missing?", context) == (
            "Context:\n"
            "Role: Data Engineer\n"
            "Seniority: Senior\n"
            "Employment type: Full-time\n"
            "Must-haves: Spark, Airflow\n"
            "Job Description:\nWe need a data engineer.\n\n"
            "User message:\nWhat am I missing?"
        )

    def test_all_labels(self):
        context = RecruitmentChatContext(
            role="r",
            seniority="s",
            industry="i",
            location="l",
            employment_type="e",
            team_context="t",
            company_stage="c",
            compensation="$",
            must_haves=["m"],
            nice_to_haves=["n"],
        )
        lines = build_user_message("x", context).split("\n")
        assert lines[1:11] == [
            "Role: r",
            "Seniority: s",
            "Industry: i",
            "Location: l",
            "Employment type: e",
            "Team context: t",
            "Company stage: c",
            "Compensation: $",
            "Must-haves: m",
            "Nice-to-haves: n",
        ]


class TestExtractAction:
    def test_marker_is_stripped_and_signalled(self):
        result = extract_action(f"Great, creating the request now.\n{ACTION_MARKER}\n")
        assert result.reply == "Great, creating the request now."
        assert result.action == "create_request"

    def test_no_marker(self):
        result = extract_action("  Which seniority are you targeting?  ")
        assert result.reply == "Which seniority are you targeting?"
        assert result.action is None

    def test_near_miss_is_not_a_marker(self):
        result = extract_action("[[ACTION:CREATE-REQUEST]]")
        assert result.action is None


class TestTrimHistory:
    def test_keeps_most_recent(self):
        history = [user(f"u{i}") if i % 2 == 0 else assistant(f"a{i}") for i in range(20)]
        trimmed = trim_history(history, 16)
        assert len(trimmed) == 16
        assert trimmed[0].content == "u4"
        assert trimmed[-1].content == "a19"

    def test_drops_system_and_blank_turns(self):
        history = [system("inject"), user("hi"), assistant("   "), assistant("hello")]
        assert [m.content for m in trim_history(history, 16)] == ["hi", "hello"]


class TestRecruitmentConsultant:
    async def test_chat(self, make_llm):
        llm, provider = make_llm("1) Recommendations\n- Add Spark\n\n2) Clarifying questions\n- Remote?")
        history = [user("I need a data engineer"), assistant("Sure, tell me more.")]
        result = await RecruitmentConsultant(llm).chat(
            RecruitmentChatInput(
                history=history,
                message="  Senior, based in Berlin  ",
                context=RecruitmentChatContext(role="Data Engineer"),
            ),
            correlation_id="session-1",
        )

        assert result.action is None
        assert result.reply.startswith("1) Recommendations")

        messages = provider.last_messages
        assert [m.role for m in messages] == ["system", "user", "assistant", "user"]
        assert messages[1:3] == history
        assert messages[-1].content.endswith("User message:\nSenior, based in Berlin")
        assert ACTION_MARKER in messages[0].content
        assert provider.last_options.temperature == 0.6
        assert provider.last_options.correlation_id == "session-1"

    async def test_confirmation_produces_action(self, make_llm):
        llm, _ = make_llm(f"Summary so far:\n- Senior Data Engineer\n{ACTION_MARKER}")
        result = await RecruitmentConsultant(llm).chat(RecruitmentChatInput(message="Yes, looks good"))
        assert result.action == "create_request"
        assert ACTION_MARKER not in result.reply
        assert result.reply.endswith("Senior Data Engineer")

    async def test_selected_language(self, make_llm):
        llm, provider = make_llm("好的")
        await RecruitmentConsultant(llm).chat(
            RecruitmentChatInput(
                message="I need a backend engineer",
                context=RecruitmentChatContext(language="zh-CN"),
            )
        )
        system_prompt = provider.last_messages[0].content
        assert system_prompt.startswith("请使用中文回复。\n\nUser selected language: Chinese.")

    async def test_detected_language_from_message(self, make_llm):
        llm, provider = make_llm("ok")
        await RecruitmentConsultant(llm).chat(
            RecruitmentChatInput(message="We need a senior engineer for the platform team")
        )
        system_prompt = provider.last_messages[0].content
        assert system_prompt.startswith("Please respond in English.\n\nYou are a Recruitment")

    async def test_history_and_jd_are_bounded(self, make_llm):
        llm, provider = make_llm("ok")
        history = [user(f"turn {i}") for i in range(10)]
        config = ConsultantConfig(max_history_messages=4, max_job_description_chars=50)
        await RecruitmentConsultant(llm, config).chat(
            RecruitmentChatInput(
                history=history,
                message="next",
                context=RecruitmentChatContext(job_description="x" * 500),
            )
        )
        messages = provider.last_messages
        assert [m.content for m in messages[1:-1]] == ["turn 6", "turn 7", "turn 8", "turn 9"]
        assert "x" * 50 + "\n\nUser message:" in messages[-1].content
        assert "x" * 51 not in messages[-1].content

    async def test_blank_message_is_rejected(self, make_llm):
        llm, provider = make_llm()
        with pytest.raises(ValueError, match="message"):
            await RecruitmentConsultant(llm).chat(RecruitmentChatInput(message="   "))
        assert provider.calls == []
