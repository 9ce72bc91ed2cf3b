"""ContentEditor widget: the writing area of the focus editor."""

from textual.widgets import TextArea


PLACEHOLDER = "Begynn å skrive her..."


class ContentEditor(TextArea):
    """Soft-wrapping plain-text editor for one block's content."""

    DEFAULT_CSS = """
    ContentEditor {
        border: solid $panel;
    }

    ContentEditor:focus {
        border: heavy $accent;
    }
    """

    def __init__(self, *args, **kwargs):
        super().__init__(
            "",
            *args,
            id="content-editor",
            soft_wrap=True,
            show_line_numbers=False,
            placeholder=PLACEHOLDER,
            **kwargs
        )

    def load_content(self, content: str) -> None:
        """Replace the text and put the cursor after the last character."""
        self.text = content
        self.move_cursor(self.document.end)

    @property
    def word_count(self) -> int:
        return len(self.text.split())
