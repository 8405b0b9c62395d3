"""Command-line interface for the mlstudio engine."""

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, Progress, TextColumn
from rich.table import Table

from mlstudio.errors import MLStudioError

if TYPE_CHECKING:
    from mlstudio.config.settings import EngineConfig, TrainingConfig
    from mlstudio.engine import Engine
    from mlstudio.evaluation.metrics import EvaluationMetrics
    from mlstudio.modeling.training import TrainingResult

app = typer.Typer(
    name="mlstudio",
    help="Simulated model lifecycle: explore, train, evaluate and predict.",
    no_args_is_help=True,
)

console = Console()

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to engine configuration YAML file.",
        exists=True,
        dir_okay=False,
    ),
]
FastOption = Annotated[
    bool,
    typer.Option("--fast", help="Skip simulated latency."),
]


def _load_engine(config: Path | None, *, fast: bool = False) -> "Engine":
    """Build an engine from an optional config file."""
    from mlstudio.config.loader import load_config
    from mlstudio.config.settings import EngineConfig
    from mlstudio.engine import Engine
    from mlstudio.utils.logging import configure_from_settings

    engine_config = load_config(config) if config is not None else EngineConfig()
    if fast:
        engine_config = _without_latency(engine_config)
    configure_from_settings(engine_config.logging)
    return Engine(engine_config)


def _without_latency(config: "EngineConfig") -> "EngineConfig":
    """Copy of the config with all simulated delays set to zero."""
    simulation = config.simulation.model_copy(
        update={"epoch_delay_s": 0.0, "prediction_delay_s": 0.0}
    )
    return config.model_copy(update={"simulation": simulation})


def _fail(message: str, error: Exception) -> typer.Exit:
    console.print(f"[red]{message}: {escape(str(error))}[/red]")
    return typer.Exit(code=1)


async def _train_with_progress(
    engine: "Engine", training: "TrainingConfig"
) -> "TrainingResult":
    """Run training while rendering one progress tick per epoch."""
    n_epochs = engine.config.simulation.n_epochs
    with Progress(
        TextColumn("[blue]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        console=console,
    ) as progress:
        task_id = progress.add_task("Training", total=n_epochs)
        run = asyncio.create_task(engine.train(training))
        # Let the run enter RUNNING before subscribing
        await asyncio.sleep(0)
        async for step in engine.trainer.watch():
            progress.update(
                task_id,
                advance=1,
                description=(
                    f"Epoch {step.epoch}: loss={step.loss:.3f} "
                    f"acc={step.accuracy:.3f}"
                ),
            )
        return await run


def _metrics_table(metrics: "EvaluationMetrics") -> Table:
    from mlstudio.evaluation.metrics import summarize_metrics

    table = Table(title="Evaluation Metrics")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    for name, value in summarize_metrics(metrics).items():
        table.add_row(name, value if isinstance(value, str) else f"{value:.3f}")
    for name, count in metrics.confusion_matrix.to_dict().items():
        table.add_row(name, str(count))
    return table


@app.command()
def datasets(config: ConfigOption = None) -> None:
    """List registered datasets."""
    engine = _load_engine(config)
    active_id = engine.summary().active_dataset_id

    table = Table(title="Datasets")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Rows", justify="right")
    table.add_column("Columns", justify="right")
    table.add_column("Target")
    for dataset in engine.datasets.list_all():
        marker = " ✓" if dataset.id == active_id else ""
        table.add_row(
            dataset.id + marker,
            dataset.name,
            str(dataset.row_count),
            str(dataset.column_count),
            dataset.target_column,
        )
    console.print(table)


@app.command()
def features(
    config: ConfigOption = None,
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-n", help="Show only the top N features."),
    ] = None,
) -> None:
    """Show the active dataset's features ranked by importance."""
    engine = _load_engine(config)
    try:
        ranked = engine.feature_importance(limit)
    except MLStudioError as e:
        raise _fail("Error", e) from e

    table = Table(title="Feature Importance")
    table.add_column("Feature", style="cyan")
    table.add_column("Type")
    table.add_column("Importance", style="green", justify="right")
    for feature in ranked:
        table.add_row(feature.name, feature.type.value, f"{feature.importance:.2f}")
    console.print(table)


@app.command()
def histogram(
    feature: Annotated[str, typer.Argument(help="Feature to bin.")],
    config: ConfigOption = None,
) -> None:
    """Show the distribution of a feature in the active dataset."""
    engine = _load_engine(config)
    try:
        result = engine.histogram(feature)
    except MLStudioError as e:
        raise _fail("Error", e) from e

    if not result.has_data:
        console.print(f"[yellow]No data available for '{feature}'[/yellow]")
        return

    peak = max(b.count for b in result.buckets)
    table = Table(title=f"Distribution of {feature} ({result.kind.value})")
    table.add_column("Bucket", style="cyan")
    table.add_column("Count", justify="right")
    table.add_column("")
    for bucket in result.buckets:
        width = round(bucket.count / peak * 40) if peak else 0
        table.add_row(bucket.label, str(bucket.count), "█" * width)
    console.print(table)


@app.command()
def train(
    config: ConfigOption = None,
    training_config: Annotated[
        Path | None,
        typer.Option(
            "--training-config",
            "-t",
            help="YAML file with a training section.",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    name: Annotated[
        str | None, typer.Option("--name", help="Model name.")
    ] = None,
    algorithm: Annotated[
        str | None, typer.Option("--algorithm", "-a", help="Algorithm name.")
    ] = None,
    seed: Annotated[
        int | None, typer.Option("--seed", "-s", help="Seed for the simulation.")
    ] = None,
    training_percentage: Annotated[
        int | None,
        typer.Option("--training-percentage", "-p", help="Train split (50-90)."),
    ] = None,
    fast: FastOption = False,
) -> None:
    """Run a simulated training and show its evaluation metrics."""
    from pydantic import ValidationError

    from mlstudio.config.loader import load_training_config
    from mlstudio.config.settings import TrainingConfig

    engine = _load_engine(config, fast=fast)

    try:
        training = (
            load_training_config(training_config)
            if training_config is not None
            else TrainingConfig()
        )
        overrides = {
            "model_name": name,
            "algorithm": algorithm,
            "seed": seed,
            "training_percentage": training_percentage,
        }
        training = TrainingConfig.model_validate(
            {
                **training.model_dump(),
                **{k: v for k, v in overrides.items() if v is not None},
            }
        )
    except ValidationError as e:
        raise _fail("Invalid training configuration", e) from e

    console.print(
        f"[blue]Training {training.resolved_algorithm()} "
        f"({training.training_percentage}/{training.test_percentage} split, "
        f"seed {training.seed})[/blue]"
    )
    try:
        result = asyncio.run(_train_with_progress(engine, training))
    except MLStudioError as e:
        raise _fail("Training failed", e) from e

    console.print(
        f"\n[green]Model '{result.model.name}' ({result.model.id}) is active[/green]"
    )
    console.print(_metrics_table(result.metrics))


@app.command()
def predict(
    config: ConfigOption = None,
    age: Annotated[int, typer.Option(help="Applicant age.")] = 35,
    income: Annotated[float, typer.Option(help="Annual income ($).")] = 80_000,
    loan_amount: Annotated[float, typer.Option(help="Loan amount ($).")] = 30_000,
    loan_term: Annotated[int, typer.Option(help="Term in months.")] = 60,
    credit_score: Annotated[int, typer.Option(help="Credit score.")] = 720,
    employment_length: Annotated[int, typer.Option(help="Years employed.")] = 8,
    home_ownership: Annotated[str, typer.Option(help="RENT, MORTGAGE or OWN.")] = "RENT",
    loan_purpose: Annotated[
        str, typer.Option(help="Purpose of the loan.")
    ] = "DEBT_CONSOLIDATION",
    debt_to_income: Annotated[float, typer.Option(help="Debt-to-income ratio.")] = 0.25,
    has_default: Annotated[str, typer.Option(help="Prior default: yes or no.")] = "no",
    seed: Annotated[
        int, typer.Option("--seed", "-s", help="Seed for the training run.")
    ] = 42,
    fast: FastOption = False,
) -> None:
    """
    Score a loan application.

    The engine keeps no state between invocations, so a model is trained
    first and then used for the prediction.
    """
    from pydantic import ValidationError

    from mlstudio.config.settings import TrainingConfig
    from mlstudio.modeling.inference import PredictionInput

    try:
        application = PredictionInput(
            age=age,
            income=income,
            loan_amount=loan_amount,
            loan_term=loan_term,
            credit_score=credit_score,
            employment_length=employment_length,
            home_ownership=home_ownership,
            loan_purpose=loan_purpose,
            debt_to_income=debt_to_income,
            has_default=has_default,
        )
    except ValidationError as e:
        raise _fail("Invalid application", e) from e

    engine = _load_engine(config, fast=fast)

    async def _run() -> None:
        await engine.train(TrainingConfig(seed=seed))
        result = await engine.predict(application)

        verdict = "[green]APPROVED[/green]" if result.approved else "[red]REJECTED[/red]"
        console.print(f"Decision: {verdict}")
        console.print(f"Probability: {result.probability:.1%}")
        console.print(f"Confidence: {result.confidence:.1%}")

    try:
        with console.status("Training model and scoring application..."):
            asyncio.run(_run())
    except MLStudioError as e:
        raise _fail("Prediction failed", e) from e


@app.command()
def demo(
    config: ConfigOption = None,
    seed: Annotated[int, typer.Option("--seed", "-s")] = 42,
    fast: FastOption = False,
) -> None:
    """Walk through the full lifecycle: explore, train, evaluate, predict."""
    from mlstudio.config.settings import TrainingConfig
    from mlstudio.modeling.inference import PredictionInput

    engine = _load_engine(config, fast=fast)
    top_n = engine.config.analytics.top_features

    try:
        console.print("[bold]1. Explore[/bold]")
        for feature in engine.feature_importance(top_n):
            console.print(f"  {feature.name:<20} {feature.importance:.2f}")

        console.print("\n[bold]2. Train[/bold]")
        training = TrainingConfig(model_name="Loan Approval Model", seed=seed)
        result = asyncio.run(_train_with_progress(engine, training))

        console.print("\n[bold]3. Evaluate[/bold]")
        console.print(_metrics_table(result.metrics))

        console.print("\n[bold]4. Predict[/bold]")
        prediction = asyncio.run(engine.predict(PredictionInput()))
    except MLStudioError as e:
        raise _fail("Demo failed", e) from e

    verdict = "approved" if prediction.approved else "rejected"
    console.print(
        f"  Default application {verdict} "
        f"(p={prediction.probability:.3f}, confidence={prediction.confidence:.3f})"
    )


@app.command()
def version() -> None:
    """Show version information."""
    from mlstudio import __version__

    console.print(f"mlstudio version {__version__}")


if __name__ == "__main__":
    app()
