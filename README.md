# jqkit

jqkit is a library of building blocks for a jq-style JSON query language.
JSON values are plain Python objects: `None`, `bool`, numbers, `str`, `list`
and `dict`. Numbers behave as 64-bit floats, and functions that produce
numbers return `float`.

It has no dependencies beyond the standard library.

## Install

```
pip install .
```

## Modules

- `jqkit.value`: the total ordering of values (`compare`, `sort_values`,
  `OrderKey`), `type_order` and `type_name`, `freeze` for a hashable key,
  compact JSON encoding and decoding (`to_json`, `from_json`) and `display`
  for human-readable messages. `to_json` writes NaN as `null` and infinities
  as the largest finite floats. `from_json` turns every number into a float.
- `jqkit.number`: `is_number` (booleans are not numbers), strict
  `parse_number`, `format_number` (never uses an exponent) and
  `saturating_int`.
- `jqkit.comparison`: the `Comparator` enum, `values_equal`,
  `partial_compare` and `apply_comparator`. NaN is never equal to a number,
  and an ordering test involving NaN is false.
- `jqkit.indexing`: `index` for `.[i]`, `.["key"]`, `.[array]` and
  `.[{start, end}]`, plus `slice_value` and `calculate_slice_index`. Each of
  `index` and `slice_value` returns the result together with its path element.
- `jqkit.paths`: `get_path`, `set_path` and `del_paths`. They never change
  their input; they return new values.
- `jqkit.regex_match`: `compile_regex(pattern, flags)` understands the flag
  letters `g i m n p s l x` and `(?<name>...)` groups; `split_match` returns
  the text between matches interleaved with a record for each match
  (`offset`, `length`, `string`, `captures`).
- `jqkit.mathfuncs`: `nan`, `infinite`, and `unary_math`, `binary_math`,
  `ternary_math` that apply a math function by its name (`floor`, `sqrt`,
  `log`, `pow`, `atan2`, `fma`, ...). Domain errors give NaN and overflow
  gives infinity instead of raising.
- `jqkit.timefuncs`: `gmtime`, `localtime`, `mktime`, `now`,
  `fromdateiso8601`, `strftime`, `strflocaltime` and `strptime`. The local
  zone is taken from the `TZ` environment variable when it is set.
- `jqkit.util`: `SharedIterator`, an iterator whose copies all advance the
  same source.
- `jqkit.errors`: `XQError` and its subclass `QueryExecutionError`, which
  `InvalidArgTypeError`, `IncompatibleOperatorError`, `DivModByZeroError`,
  `IndexingError`, `PathError` and `UserDefinedError` derive from.

## Example

```python
from jqkit.value import sort_values, to_json
from jqkit.comparison import Comparator, apply_comparator
from jqkit.indexing import index, slice_value
from jqkit.paths import set_path, del_paths
from jqkit.timefuncs import strftime

sort_values([3, None, "x", [1], True])      # [None, True, 3, 'x', [1]]
to_json({"a": 1.5, "n": float("nan")})      # '{"a":1.5,"n":null}'
apply_comparator(Comparator.LT, float("nan"), 1)  # False
index([10, 20, 30], -1)                     # (30, -1)
slice_value("hello", 1, 3)                  # ('el', {'start': 1, 'end': 3})
set_path(None, ["a", 0], True)              # {'a': [True]}
del_paths({"a": 1, "b": 2}, [["a"]])        # {'b': 2}
strftime(0, "%Y-%m-%dT%H:%M:%SZ")           # '1970-01-01T00:00:00Z'
```

## What it does not do

jqkit does not parse, compile or run query programs, and it has no command
line tool. It also has no arithmetic operators (`+ - * / %`), no string
built-ins or `@format` encoders, and no table that looks built-in functions
up by name. It provides the value model and the functions listed above, for
use by code that evaluates queries.

## Tests

```
pip install .[test]
pytest
```