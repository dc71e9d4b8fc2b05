"""Click CLI: classify | summarize | serve | saved."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from sentiment_tagger.config import service_config
from sentiment_tagger.logging_setup import configure_logging


@click.group()
@click.option("--log-level", default=None, help="Logging level (default: LOG_LEVEL or INFO)")
def cli(log_level: str | None) -> None:
    """Keyword node classification and sentiment tagging."""
    configure_logging(log_level or service_config.log_level)


def _load_json(path: str) -> object:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"{path} is not valid JSON: {exc}") from exc


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--nodes",
    "-n",
    "nodes_path",
    type=click.Path(exists=True, dir_okay=False),
    required=True,
    help="JSON file with a list of {id, name, keywords} nodes",
)
@click.option("--output", "-o", type=click.Path(), default=None, help="Write results JSON here")
@click.option(
    "--scorer",
    type=click.Choice(["placeholder", "vader"]),
    default=None,
    help="Scoring backend (default: SCORING_BACKEND or placeholder)",
)
def classify(input_path: str, nodes_path: str, output: str | None, scorer: str | None) -> None:
    """Classify entries from a .txt (blank-line separated) or .csv file."""
    from sentiment_tagger.classification.classifier import ClassificationInputError
    from sentiment_tagger.classification.classifier import classify as run_classify
    from sentiment_tagger.ingestion.entries import read_entries
    from sentiment_tagger.sentiment.scoring import get_scorer

    texts = read_entries(input_path)
    nodes = _load_json(nodes_path)
    click.echo(f"Loaded {len(texts)} entries", err=True)

    try:
        results = run_classify(texts, nodes, scorer=get_scorer(scorer))
    except ClassificationInputError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    payload = json.dumps({"results": [r.to_dict() for r in results]}, indent=2)
    if output:
        Path(output).write_text(payload, encoding="utf-8")
        click.echo(f"Saved {len(results)} results: {output}", err=True)
    else:
        click.echo(payload)


@cli.command()
@click.argument("results_path", type=click.Path(exists=True, dir_okay=False))
def summarize(results_path: str) -> None:
    """Print per-node counts, average polarity, KPI means and polarity histogram."""
    from sentiment_tagger.analysis.node_analysis import NodeAnalyzer
    from sentiment_tagger.classification.schemas import SentimentResult

    data = _load_json(results_path)
    records = data.get("results", []) if isinstance(data, dict) else data
    try:
        results = [SentimentResult.from_dict(r) for r in records]
    except (KeyError, TypeError, ValueError) as exc:
        click.echo(f"Error: malformed results file ({exc})", err=True)
        sys.exit(1)

    table = NodeAnalyzer().comparison_table(results)
    if table.empty:
        click.echo("No results to summarize.")
        return
    click.echo(table.to_string(index=False))


@cli.command()
@click.option("--host", default=None, help="Bind address (default: SERVICE_HOST)")
@click.option("--port", type=int, default=None, help="Port (default: SERVICE_PORT)")
def serve(host: str | None, port: int | None) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "sentiment_tagger.api.app:app",
        host=host or service_config.host,
        port=port or service_config.port,
        log_level=service_config.log_level.lower(),
    )


# ---------------------------------------------------------------------------
# Bookmarks
# ---------------------------------------------------------------------------


@cli.group()
@click.option(
    "--store",
    type=click.Path(dir_okay=False),
    default=None,
    help="Saved items JSON file (default: SAVED_ITEMS_PATH)",
)
@click.pass_context
def saved(ctx: click.Context, store: str | None) -> None:
    """Manage bookmarked items."""
    from sentiment_tagger.storage.saved_items import SavedItemStore

    ctx.obj = SavedItemStore(store)


@saved.command("list")
@click.pass_obj
def saved_list(store) -> None:
    """List saved items, newest first."""
    items = store.items()
    if not items:
        click.echo("No saved items.")
        return
    for item in items:
        click.echo(json.dumps(item))


def _parse_item(item_json: str) -> dict:
    try:
        item = json.loads(item_json)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"not valid JSON: {exc}") from exc
    if not isinstance(item, dict) or "id" not in item:
        raise click.BadParameter("item must be a JSON object with an 'id'")
    return item


@saved.command("add")
@click.argument("item_json")
@click.pass_obj
def saved_add(store, item_json: str) -> None:
    """Save ITEM_JSON (an object with an 'id')."""
    item = _parse_item(item_json)
    if store.save(item):
        click.echo(f"Saved {item['id']}")
    else:
        click.echo(f"Already saved: {item['id']}")


@saved.command("remove")
@click.argument("item_id")
@click.pass_obj
def saved_remove(store, item_id: str) -> None:
    """Remove the item with ITEM_ID."""
    store.unsave(item_id)
    click.echo(f"Removed {item_id}")


@saved.command("toggle")
@click.argument("item_json")
@click.pass_obj
def saved_toggle(store, item_json: str) -> None:
    """Save ITEM_JSON if unsaved, otherwise remove it."""
    item = _parse_item(item_json)
    state = "Saved" if store.toggle(item) else "Removed"
    click.echo(f"{state} {item['id']}")


if __name__ == "__main__":
    cli()
