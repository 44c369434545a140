"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import json
import logging
import uuid
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from recruit_copilot.agents.consultant import RecruitmentConsultant
from recruit_copilot.agents.interview_evaluator import InterviewEvaluator
from recruit_copilot.agents.invitation import InviteAgent
from recruit_copilot.agents.jd_parser import JDParser
from recruit_copilot.agents.jd_writer import JDWriter
from recruit_copilot.agents.resume_matcher import ResumeMatcher
from recruit_copilot.agents.resume_parser import ResumeParser
from recruit_copilot.clients.invitation_client import InvitationClient
from recruit_copilot.clients.llm_client import LLMClient
from recruit_copilot.config import AppConfig, load_config
from recruit_copilot.errors import RecruitCopilotError
from recruit_copilot.language import LanguageDetector
from recruit_copilot.models.chat import assistant, user
from recruit_copilot.models.consultant import RecruitmentChatContext, RecruitmentChatInput
from recruit_copilot.parsers.documents import load_document
from recruit_copilot.telemetry.usage_store import UsageStore

app = typer.Typer(
    name="recruit-copilot",
    help="LLM-assisted recruiting: parse, match, invite, evaluate.",
    no_args_is_help=True,
)
console = Console()

_state: dict = {}


@app.callback()
def main(
    config_path: Path = typer.Option(None, "--config", "-c", help="YAML config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    _state["config_path"] = config_path


def _config() -> AppConfig:
    try:
        return load_config(_state.get("config_path"))
    except (RecruitCopilotError, ValueError) as exc:
        console.print(f"[red]Invalid configuration: {escape(str(exc))}[/red]")
        raise typer.Exit(1)


def _llm(config: AppConfig) -> LLMClient:
    db_path = config.telemetry.resolved_db_path
    store = UsageStore(db_path) if db_path else None
    return LLMClient(config.llm, usage_store=store)


def _read(path: Path, label: str) -> str:
    if not path.exists():
        console.print(f"[red]{label} file not found: {path}[/red]")
        raise typer.Exit(1)
    try:
        return load_document(path)
    except ValueError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1)


def _run(coro):
    try:
        return asyncio.run(coro)
    except RecruitCopilotError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1)


def _emit(data: dict, output: Path | None) -> None:
    text = json.dumps(data, ensure_ascii=False, indent=2)
    if output is None:
        console.print_json(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    console.print(f"[green]Saved: {output}[/green]")


def _print_usage(llm: LLMClient) -> None:
    summary = llm.get_token_summary()
    if not summary["calls"]:
        return
    console.print(
        f"[dim]tokens: {summary['prompt']} in / {summary['completion']} out | "
        f"~${summary['cost_usd']:.4f}[/dim]"
    )


def _correlation_id() -> str:
    return uuid.uuid4().hex[:12]


@app.command("parse-jd")
def parse_jd(
    jd: Path = typer.Argument(help="Job description file (TXT/MD/PDF/DOCX)"),
    output: Path = typer.Option(None, "--output", "-o", help="Write JSON here"),
) -> None:
    """Extract a job description into structured JSON."""
    jd_text = _read(jd, "Job description")
    llm = _llm(_config())
    result = _run(JDParser(llm).parse(jd_text, correlation_id=_correlation_id()))
    _emit(result.to_json_dict(), output)
    _print_usage(llm)


@app.command("parse-resume")
def parse_resume(
    resume: Path = typer.Argument(help="Resume file (PDF/DOCX/TXT/MD)"),
    output: Path = typer.Option(None, "--output", "-o", help="Write JSON here"),
) -> None:
    """Extract a resume into structured JSON."""
    resume_text = _read(resume, "Resume")
    llm = _llm(_config())
    result = _run(ResumeParser(llm).parse(resume_text, correlation_id=_correlation_id()))
    _emit(result.to_json_dict(), output)
    _print_usage(llm)


@app.command()
def match(
    resume: Path = typer.Option(..., "--resume", help="Resume file"),
    jd: Path = typer.Option(..., "--jd", help="Job description file"),
    output: Path = typer.Option(None, "--output", "-o", help="Write full JSON here"),
) -> None:
    """Score a resume against a job description."""
    resume_text = _read(resume, "Resume")
    jd_text = _read(jd, "Job description")
    llm = _llm(_config())
    result = _run(ResumeMatcher(llm).match(resume_text, jd_text, correlation_id=_correlation_id()))

    overall = result.overall_match_score
    fit = result.overall_fit
    color = "green" if overall.score >= 65 else "yellow" if overall.score > 25 else "red"
    console.print(
        Panel(
            f"[bold {color}]{overall.score}/100 ({overall.grade})[/bold {color}] | "
            f"{escape(fit.verdict)} | {escape(fit.hiring_recommendation)}\n\n{escape(fit.summary)}",
            title=escape(result.resume_analysis.candidate_name),
        )
    )
    if result.must_have_analysis.disqualification_reasons:
        console.print("\n[red]Disqualified:[/red]")
        for reason in result.must_have_analysis.disqualification_reasons:
            console.print(f"  - {escape(reason)}")
    if output is not None:
        _emit(result.to_json_dict(), output)
    _print_usage(llm)


@app.command()
def invite(
    resume: Path = typer.Option(..., "--resume", help="Resume file"),
    jd: Path = typer.Option(..., "--jd", help="Job description file"),
    send: bool = typer.Option(False, "--send", help="Send through the invitation API"),
    recruiter_email: str = typer.Option("", "--recruiter-email", help="Required with --send"),
    interviewer_requirement: str = typer.Option("", "--interviewer-requirement"),
) -> None:
    """Draft an interview invitation, or send one through the invitation API."""
    resume_text = _read(resume, "Resume")
    jd_text = _read(jd, "Job description")
    config = _config()

    if send:
        if not recruiter_email:
            console.print("[red]--recruiter-email is required with --send[/red]")
            raise typer.Exit(1)
        try:
            client = InvitationClient(config.invitation)
        except RecruitCopilotError as exc:
            console.print(f"[red]{escape(str(exc))}[/red]")
            raise typer.Exit(1)
        ack = _run(
            client.send_invitation(
                resume_text,
                jd_text,
                recruiter_email=recruiter_email,
                interviewer_requirement=interviewer_requirement,
                correlation_id=_correlation_id(),
            )
        )
        console.print(
            Panel(escape(ack.message or "Invitation sent"), title=escape(f"{ack.name} <{ack.email}>"))
        )
        return

    llm = _llm(config)
    email = _run(InviteAgent(llm).generate_invitation(resume_text, jd_text, _correlation_id()))
    console.print(Panel(escape(email.body), title=escape(email.subject), border_style="cyan"))
    _print_usage(llm)


@app.command()
def evaluate(
    resume: Path = typer.Option(..., "--resume", help="Resume file"),
    jd: Path = typer.Option(..., "--jd", help="Job description file"),
    transcript: Path = typer.Option(..., "--transcript", help="Interview transcript file"),
    output: Path = typer.Option(None, "--output", "-o", help="Write JSON here"),
) -> None:
    """Evaluate an interview transcript."""
    resume_text = _read(resume, "Resume")
    jd_text = _read(jd, "Job description")
    script = _read(transcript, "Transcript")
    llm = _llm(_config())
    result = _run(
        InterviewEvaluator(llm).evaluate(resume_text, jd_text, script, _correlation_id())
    )

    table = Table(title=escape(result.hiring_recommendation))
    table.add_column("Dimension")
    table.add_column("Score", justify="right")
    table.add_row("Overall", str(result.overall_score))
    table.add_row("Technical", str(result.technical_score))
    table.add_row("Communication", str(result.communication_score))
    table.add_row("Culture fit", str(result.culture_fit_score))
    console.print(table)
    if output is not None:
        _emit(result.to_json_dict(), output)
    _print_usage(llm)


@app.command()
def chat(
    role: str = typer.Option("", "--role", help="Role being hired for"),
    jd: Path = typer.Option(None, "--jd", help="Existing job description"),
    language: str = typer.Option("", "--language", "-l", help="Reply locale, e.g. zh-CN"),
) -> None:
    """Interactive hiring-brief session with the recruitment consultant."""
    config = _config()
    llm = _llm(config)
    consultant = RecruitmentConsultant(llm, config.consultant)
    context = RecruitmentChatContext(
        role=role,
        job_description=_read(jd, "Job description") if jd else "",
        language=language,
    )
    session_id = _correlation_id()
    history = []

    console.print("[dim]Empty line to quit.[/dim]")
    while True:
        message = console.input("[bold]you> [/bold]").strip()
        if not message:
            break
        result = _run(
            consultant.chat(
                RecruitmentChatInput(history=history, message=message, context=context),
                correlation_id=session_id,
            )
        )
        console.print(Panel(escape(result.reply), border_style="blue"))
        history.extend([user(message), assistant(result.reply)])
        if result.action == "create_request":
            console.print("[green]Brief confirmed, ready to create the hiring request.[/green]")
            break
    _print_usage(llm)


@app.command("jd-draft")
def jd_draft(
    title: str = typer.Option("", "--title", help="Job title"),
    requirements: Path = typer.Option(None, "--requirements", help="Notes on requirements"),
    jd: Path = typer.Option(None, "--jd", help="Existing JD to revise"),
    language: str = typer.Option("", "--language", "-l", help="Reply locale, e.g. ja-JP"),
    suggest_title: bool = typer.Option(False, "--suggest-title", help="Only suggest a title"),
    output: Path = typer.Option(None, "--output", "-o", help="Write Markdown here"),
) -> None:
    """Draft (or revise) a Markdown job description."""
    requirements_text = _read(requirements, "Requirements") if requirements else ""
    jd_text = _read(jd, "Job description") if jd else ""
    llm = _llm(_config())
    writer = JDWriter(llm)

    try:
        if suggest_title:
            text = _run(writer.suggest_title(title, requirements_text, jd_text, language))
        else:
            text = _run(writer.generate(title, requirements_text, jd_text, language))
    except ValueError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1)

    if output is None:
        console.print(text)
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
        console.print(f"[green]Saved: {output}[/green]")
    _print_usage(llm)


@app.command("detect-language")
def detect_language(
    file: Path = typer.Argument(help="Text file to inspect"),
) -> None:
    """Show which reply language a document would select."""
    text = _read(file, "Input")
    detector = LanguageDetector()
    language = detector.detect(text)
    scores = detector.score(text)

    table = Table(title=f"Detected: {language.value}")
    table.add_column("Language")
    table.add_column("Score", justify="right")
    for lang, value in sorted(scores.items(), key=lambda kv: kv[1], reverse=True):
        table.add_row(lang.value, str(value))
    console.print(table)
    console.print(f"[dim]{detector.instruction_for_language(language)}[/dim]")


@app.command()
def usage(
    correlation_id: str = typer.Option(None, "--id", help="Only calls for this correlation id"),
    limit: int = typer.Option(20, "--limit", "-n", help="Max rows"),
) -> None:
    """Show recorded LLM usage from the SQLite store."""
    db_path = _config().telemetry.resolved_db_path
    if db_path is None:
        console.print("[yellow]Usage persistence is disabled (telemetry.usage_db_path).[/yellow]")
        raise typer.Exit(1)

    store = UsageStore(db_path)
    stats = store.get_stats()
    console.print(
        Panel(
            f"calls: {stats['total_calls']} | success: {stats['success_rate']:.1f}%\n"
            f"tokens: {stats['total_prompt_tokens']} in / {stats['total_completion_tokens']} out\n"
            f"cost: ~${stats['total_cost_usd']:.4f} | avg: {stats['avg_duration_ms']} ms",
            title="LLM usage",
        )
    )

    table = Table()
    for column in ("When", "Request", "Provider", "Model", "Tokens", "ms", "OK"):
        table.add_column(column)
    for record in store.get_records(correlation_id=correlation_id, limit=limit):
        table.add_row(
            record.timestamp.strftime("%m-%d %H:%M:%S"),
            record.correlation_id or "-",
            record.provider,
            record.model,
            str(record.total_tokens),
            str(record.duration_ms),
            "yes" if record.success else f"[red]{escape(record.error_message or 'no')}[/red]",
        )
    console.print(table)


if __name__ == "__main__":
    app()
