import logging
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent))

from sample_types import Order  # noqa: E402

from typeahead.typeahead_compiler import DynamicExpressionCompiler  # noqa: E402
from typeahead.typeahead_config import ParsingConfig, StringLiteralParsing  # noqa: E402


@pytest.fixture  # type: ignore[misc]
def order_type() -> type:
    return Order


@pytest.fixture  # type: ignore[misc]
def compiler() -> DynamicExpressionCompiler:
    return DynamicExpressionCompiler()


@pytest.fixture  # type: ignore[misc]
def double_quote_config() -> ParsingConfig:
    return ParsingConfig(
        string_literal_parsing=(
            StringLiteralParsing.ESCAPE_DOUBLE_QUOTE_BY_TWO_DOUBLE_QUOTES
        )
    )


@pytest.fixture  # type: ignore[misc]
def debug_logs(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    caplog.set_level(logging.DEBUG, logger="typeahead")
    return caplog
