#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
import io

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest


# Classes --------------------------------------------------------------------------------------------------------------

class FailingSink:
    """Text sink accepting a fixed number of writes, then raising OSError."""

    def __init__(self, budget: int, exc: Exception | None = None):
        self.budget = budget
        self.exc = exc or OSError("disk full")
        self.written: list[str] = []
        self.attempts = 0

    def write(self, text: str) -> int:
        self.attempts += 1
        if len(self.written) >= self.budget:
            raise self.exc
        self.written.append(text)
        return len(text)


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def failing_sink():
    """Fixture to create a sink that fails after a given number of successful writes."""

    def _create(budget: int = 0, exc: Exception | None = None) -> FailingSink:
        return FailingSink(budget, exc)

    return _create


@pytest.fixture
def closed_stream() -> io.StringIO:
    """A text stream that was already closed; writing raises ValueError."""
    stream = io.StringIO()
    stream.close()
    return stream
