import math

from models.errors import MissingField, NotANumber
from models.schemas import RAW_INPUT_FIELDS, PhysicalInputs, RawInputs


def validate(raw: RawInputs) -> PhysicalInputs:
    """Gate raw form values before estimation.

    Blank fields raise MissingField (all of them reported at once). Present values
    that do not parse as finite floats raise NotANumber. No range checks: zero and
    negative values pass through.
    """
    values = {name: (getattr(raw, name) or "").strip() for name in RAW_INPUT_FIELDS}

    missing = [name for name, value in values.items() if not value]
    if missing:
        raise MissingField(missing)

    parsed = {}
    invalid = []
    for name, value in values.items():
        try:
            number = float(value)
        except ValueError:
            invalid.append(name)
            continue
        if not math.isfinite(number):
            invalid.append(name)
            continue
        parsed[name] = number

    if invalid:
        raise NotANumber(invalid)

    return PhysicalInputs(**parsed)
