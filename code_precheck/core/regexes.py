# code_precheck/core/regexes.py
import re

# ASCII: \b и классы символов ведут себя как в JavaScript

# --- объявления ---
RE_DECLARATION      = re.compile(r"\b(let|const|var)\s+([a-zA-Z_$][a-zA-Z0-9_$]*)", re.ASCII)
RE_DECLARATION_KW   = re.compile(r"\b(const|let|var)\s+", re.ASCII)

# разделитель «слов» при подсчёте упоминаний имени
RE_NON_IDENT        = re.compile(r"[^a-zA-Z0-9_$]")

# --- числа: одна цифра 2–9 (+ любые цифры) или 3+ цифры без ведущего нуля ---
RE_MAGIC_NUMBER     = re.compile(r"\b([2-9][0-9]*|[1-9][0-9]{2,})\b", re.ASCII)

# --- функции: "function name(" ---
RE_FUNCTION_DECL    = re.compile(r"function\s+([a-zA-Z_$][a-zA-Z0-9_$]*)\s*\(", re.ASCII)

# --- блоки ---
BLOCK_OPEN  = "{"
BLOCK_CLOSE = "}"

LINE_COMMENT = "//"
