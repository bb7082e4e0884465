from werkzeug.datastructures import MultiDict

from league.exceptions import ScoreValidationError


def build_formdata(row):
    """Turn a JSON row into form data; None means the field was left blank."""
    return MultiDict({k: str(v) for k, v in row.items() if v is not None})


def validate_batch(form_class, rows):
    """
    Validate every row of a batch before anything is written.

    Args:
        form_class: Form used for each row
        rows: List of snake_case dicts

    Returns:
        List of cleaned dicts, one per row

    Raises:
        ScoreValidationError: listing every invalid value in the batch
    """
    cleaned = []
    problems = []

    for index, row in enumerate(rows):
        if not isinstance(row, dict):
            problems.append({"index": index, "message": "Row must be an object"})
            continue

        form = form_class(formdata=build_formdata(row))
        if form.validate():
            cleaned.append(form.cleaned_data())
            continue

        for field_name, errors in form.errors.items():
            for message in errors:
                problem = {
                    "index": index,
                    "field": field_name,
                    "value": row.get(field_name),
                    "message": message,
                }
                problem.update(form.owner_context(row))
                problems.append(problem)

    if problems:
        raise ScoreValidationError(problems)
    return cleaned
