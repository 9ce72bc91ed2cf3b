"""StatusPanel widget for displaying background LLM requests."""

from typing import Dict

from rich.text import Text
from textual.widgets import Static

from essaypuzzle.models.background_task import BackgroundTask


RUNNING_LABELS = {
    "sentence_analysis": "Analyserer tekst",
    "structural_advice": "Sjekker flyt",
}

FAILED_LABELS = {
    "sentence_analysis": "Analysis failed",
    "structural_advice": "Structure check failed",
}


class StatusPanel(Static):
    """Status widget for displaying background task progress.

    Error messages can contain text from the LLM service, so everything is
    rendered as plain ``Text`` and never parsed as markup.
    """

    def __init__(
        self,
        background_tasks: Dict[str, BackgroundTask],
        *args,
        **kwargs
    ):
        """Initialize StatusPanel.

        Args:
            background_tasks: Dictionary mapping task_type to BackgroundTask
        """
        super().__init__("", *args, id="status-panel", **kwargs)
        self.background_tasks = background_tasks

    def on_mount(self) -> None:
        """Set initial content when widget is mounted."""
        self.update_status()

    def update_status(self) -> None:
        """Update status display based on current background tasks."""
        self.update(self.render_status())

    def render_status(self) -> Text:
        status_parts = []

        for task in self.background_tasks.values():
            if task.status == "running":
                status_parts.append(self._format_task(task))
            elif task.status == "failed":
                status_parts.append(self._format_error(task))

        if not status_parts:
            return Text("Ready")
        return Text(" | ").join(status_parts)

    def _format_task(self, task: BackgroundTask) -> Text:
        return Text(f"{RUNNING_LABELS.get(task.task_type, task.task_type)}...")

    def _format_error(self, task: BackgroundTask) -> Text:
        label = FAILED_LABELS.get(task.task_type, "Task failed")

        if task.error_message:
            return Text(f"⚠ {label}: {task.error_message}", style="yellow")
        return Text(f"⚠ {label}", style="yellow")

    def set_task(self, task: BackgroundTask) -> None:
        """Add or update a background task.

        Args:
            task: BackgroundTask object
        """
        self.background_tasks[task.task_type] = task
        self.update_status()
