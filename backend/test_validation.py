from hero_api.validation import validate_hero_definition


def _fields(result):
    return [e.field for e in result.errors]


def test_valid_payload_produces_definition():
    result = validate_hero_definition(
        {
            "name": "Einstein",
            "description": "physicist",
            "systemPrompt": "You explain relativity.",
            "modelName": "llama3.2:latest",
            "avatarUrl": "not a url",
        }
    )

    assert result.is_valid
    d = result.definition
    assert d.name == "Einstein"
    assert d.system_prompt == "You explain relativity."
    assert d.model_name == "llama3.2:latest"
    assert d.avatar_url == "not a url"


def test_empty_name_is_rejected_on_name_only():
    result = validate_hero_definition({"name": "", "description": "x", "modelName": "m"})

    assert not result.is_valid
    assert _fields(result) == ["name"]
    assert result.errors[0].reason == "Name is required"


def test_missing_required_fields_are_aggregated():
    result = validate_hero_definition({})

    assert not result.is_valid
    assert sorted(_fields(result)) == ["description", "modelName", "name"]
    reasons = {e.field: e.reason for e in result.errors}
    assert reasons["modelName"] == "Model is required"
    assert reasons["description"] == "Description is required"


def test_optional_fields_pass_through_untouched():
    result = validate_hero_definition(
        {"name": " a ", "description": " b ", "modelName": "m", "systemPrompt": "", "avatarUrl": ""}
    )

    assert result.is_valid
    # no trimming
    assert result.definition.name == " a "
    assert result.definition.system_prompt == ""
    assert result.definition.avatar_url == ""


def test_optional_fields_default_to_none():
    result = validate_hero_definition({"name": "a", "description": "b", "modelName": "m"})

    assert result.definition.system_prompt is None
    assert result.definition.avatar_url is None


def test_unknown_keys_are_ignored():
    result = validate_hero_definition(
        {"name": "a", "description": "b", "modelName": "m", "role": "ADMIN"}
    )
    assert result.is_valid


def test_wrong_types_are_field_errors():
    result = validate_hero_definition(
        {"name": 42, "description": "b", "modelName": "m", "systemPrompt": ["x"]}
    )

    assert not result.is_valid
    assert sorted(_fields(result)) == ["name", "systemPrompt"]


def test_snake_case_keys_are_accepted():
    result = validate_hero_definition(
        {"name": "a", "description": "b", "model_name": "m", "system_prompt": "p"}
    )

    assert result.is_valid
    assert result.definition.model_name == "m"
    assert result.definition.system_prompt == "p"


def test_non_mapping_payload_is_rejected():
    for payload in (None, [], "hero"):
        result = validate_hero_definition(payload)
        assert not result.is_valid
        assert _fields(result) == ["body"]
