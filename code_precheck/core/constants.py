# code_precheck/core/constants.py

VERSION = "PRECHECK-JS-1"

SEVERITY_ERROR = "error"
SEVERITY_WARN  = "warning"
SEVERITY_INFO  = "info"

STATUS_PENDING  = "pending"
STATUS_ACCEPTED = "accepted"
STATUS_REJECTED = "rejected"
DECISIONS = (STATUS_ACCEPTED, STATUS_REJECTED)

# Стабильные идентификаторы видов замечаний (закрытый набор)
KIND = {
    "UNUSED_VAR":   "UnusedVariable",
    "NESTING":      "ExcessiveNesting",
    "MAGIC_NUMBER": "MagicNumber",
    "LONG_FUNC":    "LongFunction",
}

# Человекочитаемые названия — для карточек и отчётов
TITLE = {
    KIND["UNUSED_VAR"]:   "Unused Variable",
    KIND["NESTING"]:      "Excessive Nesting",
    KIND["MAGIC_NUMBER"]: "Magic Number",
    KIND["LONG_FUNC"]:    "Overly Long Function",
}

SEVERITY = {
    KIND["UNUSED_VAR"]:   SEVERITY_WARN,
    KIND["NESTING"]:      SEVERITY_WARN,
    KIND["MAGIC_NUMBER"]: SEVERITY_INFO,
    KIND["LONG_FUNC"]:    SEVERITY_ERROR,
}

# Пороги фиксированы, через конфиг не настраиваются
MAX_NESTING_DEPTH = 4
MAX_FUNCTION_LINES = 30

SOURCE_EXTENSIONS = (".js", ".mjs", ".cjs", ".jsx", ".ts", ".tsx", ".txt")
