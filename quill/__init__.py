# Core type aliases for Quill's data model.
# Runtime values are plain Python objects where possible:
# - SmallInt -> int (kept inside the signed 64-bit range)
# - Real     -> decimal.Decimal (computed under quill.types.numeric.DECIMAL_CONTEXT)
# - Function -> quill.types.function.Function
#
# Naming guidance:
# - Expression: use in reader/parser code for syntax trees (quill.types.nodes).
# - QuillValue: use in evaluator/runtime code for evaluated values.

from typing import Any, Callable

__version__ = "0.1.0"

# Runtime value alias
QuillValue = Any

# Evaluator function type: (expression, environment) -> value
EvaluatorFn = Callable[..., QuillValue]
