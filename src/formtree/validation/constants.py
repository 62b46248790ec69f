"""
Constants for schema validation.

Patterns, messages and suggestion templates used by the structural and
semantic passes. Keeping them together makes the wording easy to update
without touching the traversal code.
"""

import re

# Answer keys: lowercase letters, digits, underscore
FIELD_NAME_PATTERN = re.compile(r"[a-z0-9_]+")

# Runs of characters that are not allowed in a snake_case suggestion
NON_WORD_RUN = re.compile(r"[^\w]+")

ROOT_PATH = "fields"

# Structural messages
FIELDS_NOT_ARRAY_MESSAGE = '"fields" must be an array of field objects.'
FIELDS_NOT_ARRAY_SUGGESTION = (
    'Use "fields": [ { "type":"text", "label":"...", "name":"..." }, ... ]'
)
BRANCH_NOT_ARRAY_MESSAGE = 'conditions["{key}"] must be an array of field objects'
BRANCH_NOT_ARRAY_SUGGESTION = (
    'Ensure this value is an array of field objects; e.g. '
    '"conditions": { "Yes": [{ "type":"text","label":"...","name":"..." }] }'
)
FIELD_NOT_OBJECT_MESSAGE = "Field must be an object"
FIELD_NOT_OBJECT_SUGGESTION = (
    'Ensure field at {path} is an object with keys like "type", "label", "name".'
)
MISSING_OPTIONS_MESSAGE = 'Missing or empty "options" for {type} field'
MISSING_OPTIONS_SUGGESTION = (
    'Add an "options" array. Example: "options": ["Option 1", "Option 2"]'
)

# Parse messages
NO_SCHEMA_MESSAGE = "No schema provided"
NO_SCHEMA_SUGGESTION = "Provide a schema object with a 'fields' array."
JSON_PARSE_MESSAGE = "JSON parse error - fix JSON syntax ({error})"
JSON_PARSE_SUGGESTION = "Check commas, brackets and object structure."
NOT_A_MAPPING_MESSAGE = "Schema must be a JSON object, got {kind}"
NOT_A_MAPPING_SUGGESTION = 'Wrap the form in an object: { "title": "...", "fields": [ ... ] }'

# Semantic rule messages
BAD_BRANCH_KEY_MESSAGE = 'conditions key "{key}" does not match any option in parent field.options'
BAD_BRANCH_KEY_SUGGESTION = (
    'Either add "{key}" to parent field.options or remove the conditions key. '
    'Example: "options": ["{key}", "Other"]'
)
BAD_FIELD_NAME_MESSAGE = "name must be snake_case (lowercase letters, digits, underscores)"
BAD_FIELD_NAME_SUGGESTION = 'Use snake_case for "name". Example: "{example}"'
BAD_FIELD_NAME_FALLBACK_SUGGESTION = "Use snake_case (lowercase letters, digits, underscores)."
DUPLICATE_NAME_MESSAGE = (
    'name "{name}" is already used by the field at {first_path}, which can be visible at the same time'
)
DUPLICATE_NAME_SUGGESTION = 'Fields that can be shown together need unique names. Example: "{name}_2"'
TOO_DEEP_MESSAGE = "Fields are nested too deeply to validate."
TOO_DEEP_SUGGESTION = "Flatten the form: move deep branches up a level."
MISSING_CONDITIONS_MESSAGE = (
    "At least one field must include a 'conditions' object (conditional logic required)."
)
MISSING_CONDITIONS_SUGGESTION = (
    'Add "conditions" to a choice field, e.g. "conditions": { "Yes": [ { "type":"text", '
    '"label":"...", "name":"..." } ] }'
)
MISSING_NESTED_CONDITIONS_MESSAGE = (
    "At least one conditional branch must contain a field that itself has 'conditions' "
    "(nested/recursive conditions required)."
)
MISSING_NESTED_CONDITIONS_SUGGESTION = (
    'Inside an existing branch, give a choice field its own "conditions", e.g. '
    '"conditions": { "Yes": [ { "type":"radio", "options":["A","B"], '
    '"conditions": { "A": [ ... ] } } ] }'
)

# Model pass suggestions
OPTIONS_SUGGESTION = 'Add an "options" array (non-empty). Example: "options": ["Yes","No"]'
CONDITIONS_SUGGESTION = (
    '"conditions" must map option values to arrays of fields; e.g. '
    '"conditions": { "Yes": [{ "type":"text","label":"...","name":"..." }] }'
)
TYPE_SUGGESTION = "Use one of: {choices}"
REQUIRED_SUGGESTION = 'Use true or false for "required".'
LABEL_SUGGESTION = 'Give the field a non-empty "label".'
MISSING_KEY_SUGGESTION = 'Add the "{key}" property.'
STRING_SUGGESTION = '"{key}" must be a string.'
GENERIC_SUGGESTION = (
    'Check the field at path "{path}". The value does not match the expected structure.'
)
