# code_precheck/core/loader.py
import os
from typing import List


class InvalidInputError(ValueError):
    """Пустой или пробельный исходник — ошибка ввода, а не сбой движка."""


def split_lines(text: str) -> List[str]:
    # только "\n": "\r" остаётся частью строки, пустой хвост сохраняется
    return text.split("\n")


def ensure_source(text: str) -> str:
    if text is None or text.strip() == "":
        raise InvalidInputError("Please enter some code to analyze.")
    return text


def load_source(path: str) -> str:
    if not os.path.isfile(path):
        raise FileNotFoundError(f"File not found: {path}")
    with open(path, "r", encoding="utf-8-sig", errors="ignore", newline="") as f:
        return f.read()
