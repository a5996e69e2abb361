# cli.py
import json, time, webbrowser
from pathlib import Path
from typing import Optional
import typer

from core.classify import ChangeKind
from core.errors import ClassificationAnomaly, ConfigurationError, LoadError
from core.mesh_export import export_group, obj_name
from core.partition import partition_changes
from core.pipeline import iter_steps
from core.records import count_line, delta_name, summarize, write_delta
from core.sources import (DEFAULT_PATTERN, check_output_folder, find_snapshot_sources,
                          prepare_output_folder)
from core.tolerance import DEFAULT_TOLERANCE, TolerancePolicy


def _loader():
    # pxr is heavy; only pulled in when stages are actually read
    from core.usd_loader import load_snapshot
    return load_snapshot

# ---------------- main app ----------------
app = typer.Typer(add_completion=False, help="Compute per-element deltas across an ordered folder of USD stages.")

@app.command()
def diff(
    input_folder: str = typer.Argument(..., help="Folder holding the stages; file name order is time order"),
    output: Optional[str] = typer.Option(None, help="Output folder (default: INPUT_FOLDER/output). Cleared first."),
    pattern: str = typer.Option(DEFAULT_PATTERN, help="Glob selecting the stages"),
    volume_tolerance: float = typer.Option(DEFAULT_TOLERANCE, help="Volume change below which an element is not resized"),
    position_tolerance: float = typer.Option(DEFAULT_TOLERANCE, help="Center distance below which an element has not moved"),
    plans: bool = typer.Option(True, help="Render a top-down plan PNG per step"),
    width: int = typer.Option(640, help="Plan image width in pixels"),
    open_html: bool = typer.Option(False, help="Open the HTML report when done"),
):
    t0 = time.perf_counter()
    try:
        policy = TolerancePolicy(volume=volume_tolerance, position=position_tolerance)
        sources = find_snapshot_sources(input_folder, pattern)
        if not sources:
            raise ConfigurationError(f"no stages matching {pattern!r} in {input_folder}")
        out_path = Path(output) if output else Path(input_folder) / "output"
        check_output_folder(out_path, sources)
    except ConfigurationError as exc:
        typer.secho(f"Configuration error: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=2)

    out_dir = prepare_output_folder(out_path, sources)
    typer.echo(f"{len(sources)} stage(s) -> {out_dir}")

    steps = []
    try:
        for step in iter_steps(sources, _loader(), policy):
            i = step.index
            delta = write_delta(step.records, out_dir / delta_name(i))

            objs = []
            for kind, group in partition_changes(step.records, step.current, step.previous).items():
                objs.append(export_group(group, out_dir / obj_name(kind, i)))

            plan = None
            if plans:
                from report.plan_view import render_plan
                plan = render_plan(step.records, step.current, step.previous,
                                   str(out_dir / f"plan_{i}.png"), width=width)

            counts = summarize(step.records)
            typer.echo(f"[{i}] {Path(str(step.source)).name}: {count_line(counts)}")
            steps.append({
                "index": i,
                "source": str(step.source),
                "counts": counts,
                "delta": delta,
                "objs": objs,
                "plan": plan,
            })
    except (LoadError, ClassificationAnomaly) as exc:
        typer.secho(f"Failed: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    report = {
        "input_folder": str(input_folder),
        "volume_tolerance": policy.volume,
        "position_tolerance": policy.position,
        "kinds": [k.value for k in ChangeKind],
        "steps": steps,
    }
    (out_dir / "report.json").write_text(json.dumps(report, indent=2))
    from report.html_report import write_html
    html_path = write_html(str(out_dir / "report.html"), report)

    typer.secho(f"Computing all deltas: {time.perf_counter() - t0:.2f}s  report={html_path}", fg=typer.colors.GREEN)

    if open_html:
        try:
            webbrowser.open(Path(html_path).absolute().as_uri())
        except Exception:
            pass


if __name__ == "__main__":
    app()
