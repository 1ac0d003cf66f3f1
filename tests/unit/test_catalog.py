"""Unit tests for the model catalog."""

import pytest

from omni_console.shared.catalog import SUGGESTED_MODELS, CatalogError, ModelCatalog
from omni_console.shared.models import ModelOption, Provider


def discovered(provider, *ids):
    return [ModelOption(id=i, name=i.upper(), provider=provider) for i in ids]


class TestModelCatalog:
    """Test ModelCatalog editing and lookup."""

    def test_same_identity_replaces(self):
        """Test adding m1 twice keeps one entry carrying the latest name."""
        catalog = ModelCatalog()

        catalog.add_manual("m1", Provider.OPENAI, "First")
        catalog.add_manual("m1", Provider.OPENAI, "Second")

        assert len(catalog) == 1
        assert catalog.models[0].name == "Second"
        assert catalog.models[0].is_manual

    def test_same_id_different_provider_coexist(self):
        """Test identity is the (id, provider) pair."""
        catalog = ModelCatalog()

        catalog.add_manual("shared", Provider.OPENAI)
        catalog.add_manual("shared", Provider.ANTHROPIC)

        assert len(catalog) == 2
        assert catalog.find("shared", Provider.ANTHROPIC).provider == Provider.ANTHROPIC

    def test_name_defaults_to_id(self):
        """Test manual entries without a name show their id."""
        model = ModelCatalog().add_manual("  my-model ", Provider.GOOGLE)

        assert model.id == "my-model"
        assert model.name == "my-model"

    def test_empty_id_rejected(self):
        """Test blank ids raise CatalogError."""
        with pytest.raises(CatalogError):
            ModelCatalog().add_manual("   ", Provider.OPENAI)

    def test_initial_duplicates_collapse(self):
        """Test duplicates in the initial list keep the last one."""
        catalog = ModelCatalog([
            ModelOption(id="a", name="old", provider=Provider.OPENAI),
            ModelOption(id="a", name="new", provider=Provider.OPENAI),
        ])

        assert [m.name for m in catalog.models] == ["new"]

    def test_remove(self):
        """Test remove reports whether anything was removed."""
        catalog = ModelCatalog(SUGGESTED_MODELS)

        assert catalog.remove("gpt-4o", Provider.OPENAI) is True
        assert catalog.remove("gpt-4o", Provider.OPENAI) is False
        assert catalog.find("gpt-4o") is None

    def test_for_providers(self):
        """Test filtering by provider keeps catalog order."""
        catalog = ModelCatalog(SUGGESTED_MODELS)

        ids = [m.id for m in catalog.for_providers({Provider.ANTHROPIC})]

        assert ids == ["claude-3-5-sonnet-20240620", "claude-3-opus-20240229"]

    def test_on_change_called_per_mutation(self):
        """Test each edit is handed to the persistence callback."""
        snapshots = []
        catalog = ModelCatalog(on_change=snapshots.append)

        catalog.add_manual("m1", Provider.OPENAI)
        catalog.remove("m1", Provider.OPENAI)
        catalog.remove("m1", Provider.OPENAI)

        assert [len(s) for s in snapshots] == [1, 0]


class TestReplaceDiscovered:
    """Test per-provider discovery refresh."""

    def test_keeps_manual_and_other_providers(self):
        """Test refresh replaces only the provider's discovered models."""
        catalog = ModelCatalog(discovered(Provider.OPENAI, "gpt-old") + discovered(Provider.GOOGLE, "gemini-1"))
        catalog.add_manual("ft:custom", Provider.OPENAI)

        count = catalog.replace_discovered(Provider.OPENAI, discovered(Provider.OPENAI, "gpt-4o", "gpt-4o-mini"))

        assert count == 2
        keys = {(m.id, m.provider) for m in catalog.models}
        assert keys == {
            ("gemini-1", Provider.GOOGLE),
            ("ft:custom", Provider.OPENAI),
            ("gpt-4o", Provider.OPENAI),
            ("gpt-4o-mini", Provider.OPENAI),
        }

    def test_manual_entry_wins_collision(self):
        """Test a discovered model does not override a manual one."""
        catalog = ModelCatalog()
        catalog.add_manual("gpt-4o", Provider.OPENAI, "My GPT")

        count = catalog.replace_discovered(Provider.OPENAI, discovered(Provider.OPENAI, "gpt-4o", "o1"))

        assert count == 1
        assert catalog.find("gpt-4o", Provider.OPENAI).name == "My GPT"
        assert catalog.find("o1", Provider.OPENAI).is_manual is False

    def test_empty_result_leaves_catalog(self):
        """Test an empty discovery does not wipe the provider's models."""
        snapshots = []
        catalog = ModelCatalog(discovered(Provider.OPENAI, "gpt-4o"), on_change=snapshots.append)

        assert catalog.replace_discovered(Provider.OPENAI, []) == 0
        assert [m.id for m in catalog.models] == ["gpt-4o"]
        assert snapshots == []

    def test_discovered_entries_are_normalized(self):
        """Test stored copies carry the refreshed provider and are not manual."""
        catalog = ModelCatalog()
        rows = [ModelOption(id="claude-x", name="X", provider=Provider.OPENAI, is_manual=True)]

        catalog.replace_discovered(Provider.ANTHROPIC, rows)

        model = catalog.models[0]
        assert model.provider == Provider.ANTHROPIC
        assert model.is_manual is False
