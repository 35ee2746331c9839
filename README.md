# tagcheck

`tagcheck` checks data against short rule strings called tags. A tag is a
comma-separated list of check names, such as `"omitempty,even"` or
`"dive,positive"`. It can apply to a single value, to the fields of a
dataclass, or to the elements of a sequence or mapping.

## Installing

```
pip install tagcheck
```

To run the test suite as well:

```
pip install "tagcheck[test]"
pytest
```

## Checking a single value

Create a `tagcheck.validator.Validate`. Register the checks you need, then
call `var` with a value and a tag. When every check passes, `var` returns
`None`. Otherwise it raises `tagcheck.errors.ValidationErrors`.

```python
from tagcheck.validator import Validate
from tagcheck.errors import ValidationErrors

def even(fl):
    return fl.field() % 2 == 0

def below(fl):
    return fl.field() < int(fl.param())

v = Validate()
v.register_validation("even", even)
v.register_validation("below", below)

v.var(4, "even,below=10")        # passes

try:
    v.var(3, "even")
except ValidationErrors as errs:
    for err in errs:
        print(err.tag, err.value)   # even 3
```

Each check receives a field-level object (`tagcheck.levels.FieldLevel`), which
offers:

- `field()`: the value under test.
- `param()`: the tag's parameter, as a string.
- `get_tag()`: the name of the check that is running.
- `field_name()` and `struct_field_name()`: the field's reported name and its attribute name.
- `parent()` and `top()`: the enclosing structure and the top-level value.
- `get_struct_field()` and `get_struct_field_advanced(value, namespace)`: look up another field by a path such as `Inner.Items[0]` or `Map[key]`.

A check returns `True` when the value is valid.

Registration methods:

- `register_validation(tag, fn, call_even_if_null=False)` registers a check `fn(fl)`.
- `register_validation_ctx(tag, fn, call_even_if_null=False)` registers a check `fn(ctx, fl)`. It receives the `ctx` argument passed to `var` or `struct`.

A nil value (`None`) normally fails a tagged check without the check being
called. Pass `call_even_if_null=True` to have the check run on `None` as well.

A check name cannot be empty. It cannot contain any of `.[],|=+()`~!@#$%^&*\"/?<>{}`,
and it cannot be one of the reserved words (`dive`, `keys`, `endkeys`,
`omitempty`, `required`, and so on). Registering such a name raises
`ValueError`.

## Built-in checks

Only two checks come pre-registered:

- `required`: the value is set, meaning it is not `None` and not a zero value.
- `isdefault`: the opposite of `required`.

Nothing else is built in, so there are no ready-made `email` or `uuid` checks.
The `tagcheck.regexes` module does provide lazily compiled patterns for many
common formats, such as `email_regex`, `uuid4_regex`, `hex_color_regex` and
`semver_regex`. Each one is a function that returns the compiled pattern. To
turn one into a check, combine it with `tagcheck.util.field_matches_regex`:

```python
from tagcheck.regexes import email_regex
from tagcheck.util import field_matches_regex

v.register_validation("email", lambda fl: field_matches_regex(email_regex, fl))
v.var("someone@example.com", "email")
```

## Tag syntax

- `,` separates checks. They run in order, and a field stops at its first failure.
- `|` separates alternatives: `"even|negative"` passes when either check passes.
- `=` introduces a parameter: `"below=10"`. To put a comma or a pipe inside a parameter, write `0x2C` or `0x7C`.
- `omitempty`, `omitzero` and `omitnil` skip the rest of the tag when the value is empty, zero or `None`.
- `dive` applies the rest of the tag to each element of a sequence, or to each value of a mapping. `dive,keys,<checks>,endkeys,<checks>` checks the mapping's keys with the first group of checks and its values with the second.
- `structonly` runs only the struct-level check of a nested dataclass. `nostructlevel` skips the nested dataclass entirely.
- `-` as a field's whole tag skips that field.

An unknown check name or a malformed tag raises `ValueError` when the tag is
parsed. For `var`, parsing happens on first use of the tag, and the parsed
result is cached.

## Aliases

An alias gives a name to a tag string you use often:

```python
v.register_alias("small_even", "even,below=100")
v.var(42, "small_even")
```

When a check inside an alias fails, the error's `tag` is the alias name and
its `actual_tag` is the underlying check.

## Dataclasses

`struct(obj, ctx=None)` checks every field of a dataclass instance. Each
field's tag is read from the field's metadata under the key given to
`Validate(tag_name="validate")`:

```python
from dataclasses import dataclass, field

@dataclass
class User:
    name: str = field(default="", metadata={"validate": "required"})
    age: int = field(default=0, metadata={"validate": "omitempty,even"})

try:
    v.struct(User(age=3))
except ValidationErrors as errs:
    print([e.namespace for e in errs])   # ['User.name', 'User.age']
```

Nested dataclasses are checked recursively. Fields whose names start with an
underscore are skipped unless you pass `Validate(private_field_validation=True)`.
By default, `required` is not applied to a nested dataclass value; pass
`required_struct_enabled=True` to apply it.

Calling `struct` with `None`, or with anything that is not a structure,
raises `tagcheck.errors.InvalidValidationError`.

Further registration methods:

- `register_struct_validation(fn, *types)` and `register_struct_validation_ctx(fn, *types)` add a check for the whole structure. It runs after the field checks. The function receives a `tagcheck.levels.StructLevel`, which offers `current()`, `parent()`, `top()` and `validator()`. To record problems, call `report_error(field, field_name, struct_field_name, tag, param)` or `report_validation_errors(relative_namespace, relative_struct_namespace, errs)`.
- `register_struct_validation_map_rules(rules, *types)` supplies field tags as a mapping from field name to tag. These rules take precedence over the field metadata.
- `register_tag_name_func(fn)` takes a function that receives a `dataclasses.Field` and returns the name to report the field under. An empty string keeps the attribute name.
- `register_custom_type_func(fn, *types)` converts values of the given types with `fn` before they are checked.

## Errors

`ValidationErrors` is a `ValueError` that holds `FieldError` items. You can
iterate over it, index into it and take its length. Each `FieldError` has these
attributes:

- `tag`, `actual_tag` and `param`
- `namespace` and `struct_namespace`
- `field` and `struct_field`
- `value`, `kind` (a `tagcheck.util.Kind`) and `type`

Each error renders as:

```
Key: '<namespace>' Error:Field validation for '<field>' failed on the '<tag>' tag
```

## What it does not do

- There is no command-line tool.
- There is no large catalogue of ready-made checks. You register the checks you need.
- There is no entry point for partial validation, meaning validating or excluding only some fields of a structure.
- There are no translated or user-facing error messages. Errors carry the data needed to build them.