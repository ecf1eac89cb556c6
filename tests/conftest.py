from typing import List

import pytest


def make_function(name: str, total_lines: int, body: str = "  work();") -> List[str]:
    """Функция ровно из total_lines строк: заголовок, тело, закрывающая скобка."""
    return [f"function {name}() {{"] + [body] * (total_lines - 2) + ["}"]


@pytest.fixture
def function_lines():
    return make_function
