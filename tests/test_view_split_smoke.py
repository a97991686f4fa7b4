import pytest
from unittest.mock import patch, MagicMock

# Mock streamlit before importing the app
st_mock = MagicMock()


def test_page_registry_structure():
    with patch.dict("sys.modules", {"streamlit": st_mock}):
        from app import PAGE_REGISTRY
    """
    Tests that the PAGE_REGISTRY has the correct structure.
    """
    assert isinstance(PAGE_REGISTRY, dict)
    for key, value in PAGE_REGISTRY.items():
        assert "label" in value
        assert "render_func" in value
        assert isinstance(value["label"], str)


def test_expected_pages_are_registered():
    with patch.dict("sys.modules", {"streamlit": st_mock}):
        from app import PAGE_REGISTRY
    assert list(PAGE_REGISTRY) == ["dashboard", "experiments", "protocols", "notes", "analytics"]


def test_labels_are_unique():
    with patch.dict("sys.modules", {"streamlit": st_mock}):
        from app import PAGE_REGISTRY
    labels = [v["label"] for v in PAGE_REGISTRY.values()]
    assert len(labels) == len(set(labels))


def test_all_render_functions_are_callable():
    with patch.dict("sys.modules", {"streamlit": st_mock}):
        from app import PAGE_REGISTRY
    """
    Ensures that every page in the registry points to a callable function.
    """
    for page_key, page_config in PAGE_REGISTRY.items():
        assert callable(
            page_config['render_func']), f"Render function for '{page_key}' is not callable."
