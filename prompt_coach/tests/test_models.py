from app import models


def test_registry_lists_both_gemini_models():
    ids = [m.id for m in models.list_models()]
    assert ids == ["gemini-1.5-flash", "gemini-1.5-pro"]
    assert models.get_model_by_id("gemini-1.5-flash").name == "Gemini 1.5 Flash"
    assert models.get_model_by_id("gemini-1.5-pro").name == "Gemini 1.5 Pro"


def test_every_model_has_string_fields():
    for m in models.list_models():
        assert isinstance(m.id, str) and m.id
        assert isinstance(m.name, str) and m.name
        assert isinstance(m.description, str) and m.description


def test_ids_are_unique():
    ids = [m.id for m in models.list_models()]
    assert len(ids) == len(set(ids))


def test_default_model_is_flash_and_registered():
    assert models.default_model_id() == "gemini-1.5-flash"
    assert models.is_valid_model_id(models.default_model_id())


def test_is_valid_model_id_accepts_every_registered_id():
    for m in models.list_models():
        assert models.is_valid_model_id(m.id)


def test_is_valid_model_id_rejects_unknown_empty_and_wrong_case():
    assert not models.is_valid_model_id("invalid-model")
    assert not models.is_valid_model_id("")
    assert not models.is_valid_model_id("Gemini-1.5-Flash")
    assert not models.is_valid_model_id(None)
    assert not models.is_valid_model_id(42)


def test_get_model_by_id_returns_none_when_missing():
    assert models.get_model_by_id("invalid-model") is None


def test_list_models_returns_a_copy():
    listed = models.list_models()
    listed.clear()
    assert len(models.list_models()) == 2
