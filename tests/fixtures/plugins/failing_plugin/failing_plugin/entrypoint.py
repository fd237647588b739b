"""Entrypoint that always fails to initialize."""


class FailingEntrypoint:
    def init(self, ctx) -> None:
        raise RuntimeError("boom")
