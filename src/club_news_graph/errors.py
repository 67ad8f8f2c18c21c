from __future__ import annotations


class GraphError(Exception):
    """Base class for recoverable article graph errors."""


class DuplicateIdError(GraphError):
    def __init__(self, article_id: str):
        super().__init__(f"Article {article_id} already exists")
        self.article_id = article_id


class NotFoundError(GraphError, KeyError):
    """Raised when an operation references an article id that is not in the graph."""

    def __init__(self, article_id: str, role: str = "Article"):
        super().__init__(f"{role} {article_id} not found")
        self.article_id = article_id

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class DuplicateTitleError(GraphError):
    def __init__(self, title: str, existing_id: str):
        super().__init__(f"An article titled {title!r} already exists ({existing_id})")
        self.title = title
        self.existing_id = existing_id
