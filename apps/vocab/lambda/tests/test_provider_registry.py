import itertools
import os
import unittest
from unittest.mock import patch

from vocab_api.config import load_config
from vocab_api.provider_registry import ProviderRegistry, is_usable_api_key

OPENAI_KEY = "sk-abc"
GEMINI_KEY = "AIza-xyz"
CLAUDE_KEY = "sk-ant-123"


def registry_for(env: dict[str, str]) -> ProviderRegistry:
    return ProviderRegistry(config_loader=lambda: load_config(env))


class ApiKeyShapeTests(unittest.TestCase):
    def test_openai_requires_sk_prefix(self) -> None:
        self.assertTrue(is_usable_api_key("openai", "sk-abc"))
        self.assertFalse(is_usable_api_key("openai", "abc"))

    def test_gemini_accepts_aiza_prefix_or_long_keys(self) -> None:
        self.assertTrue(is_usable_api_key("gemini", "AIza-xyz"))
        self.assertTrue(is_usable_api_key("gemini", "x" * 21))
        self.assertFalse(is_usable_api_key("gemini", "short"))

    def test_claude_requires_sk_ant_prefix(self) -> None:
        self.assertTrue(is_usable_api_key("claude", "sk-ant-123"))
        self.assertFalse(is_usable_api_key("claude", "sk-123"))

    def test_placeholders_and_empty_values_are_rejected(self) -> None:
        self.assertFalse(is_usable_api_key("openai", None))
        self.assertFalse(is_usable_api_key("openai", ""))
        self.assertFalse(is_usable_api_key("gemini", "your_gemini_api_key_here"))
        self.assertFalse(is_usable_api_key("claude", "your_claude_api_key_here"))


class ListAvailableProvidersTests(unittest.TestCase):
    def test_returns_shape_valid_subset_in_priority_order(self) -> None:
        keys = {
            "OPENAI_API_KEY": (OPENAI_KEY, "openai"),
            "GEMINI_API_KEY": (GEMINI_KEY, "gemini"),
            "CLAUDE_API_KEY": (CLAUDE_KEY, "claude"),
        }
        for present in itertools.product([True, False], repeat=3):
            env = {}
            expected = []
            for (env_var, (value, provider)), include in zip(keys.items(), present):
                if include:
                    env[env_var] = value
                    expected.append(provider)
            # Preferences never affect membership or order.
            env["LLM_PROVIDER"] = "claude"
            env["LLM_FALLBACK_PROVIDER"] = "gemini"
            with self.subTest(env=env):
                self.assertEqual(registry_for(env).list_available_providers(), expected)

    def test_malformed_keys_are_excluded(self) -> None:
        env = {"OPENAI_API_KEY": "not-a-key", "CLAUDE_API_KEY": "sk-wrong", "GEMINI_API_KEY": " "}
        self.assertEqual(registry_for(env).list_available_providers(), [])


class ResolutionTests(unittest.TestCase):
    def test_single_openai_key(self) -> None:
        registry = registry_for({"OPENAI_API_KEY": OPENAI_KEY})

        self.assertEqual(registry.list_available_providers(), ["openai"])
        self.assertEqual(registry.resolve_primary(), "openai")
        self.assertIsNone(registry.resolve_fallback())
        self.assertTrue(registry.validate().is_valid)

    def test_configured_primary_and_fallback(self) -> None:
        registry = registry_for(
            {
                "OPENAI_API_KEY": OPENAI_KEY,
                "GEMINI_API_KEY": GEMINI_KEY,
                "LLM_PROVIDER": "gemini",
                "LLM_FALLBACK_PROVIDER": "openai",
            }
        )

        self.assertEqual(registry.resolve_primary(), "gemini")
        self.assertEqual(registry.resolve_fallback(), "openai")

    def test_unavailable_primary_preference_uses_first_available(self) -> None:
        registry = registry_for({"OPENAI_API_KEY": OPENAI_KEY, "LLM_PROVIDER": "claude"})

        self.assertEqual(registry.resolve_primary(), "openai")

    def test_preference_is_case_insensitive(self) -> None:
        registry = registry_for(
            {"OPENAI_API_KEY": OPENAI_KEY, "CLAUDE_API_KEY": CLAUDE_KEY, "LLM_PROVIDER": " Claude "}
        )

        self.assertEqual(registry.resolve_primary(), "claude")
        self.assertEqual(registry.resolve_fallback(), "openai")

    def test_no_providers_resolves_to_none(self) -> None:
        registry = registry_for({})

        self.assertIsNone(registry.resolve_primary())
        self.assertIsNone(registry.resolve_fallback())

    def test_fallback_defaults_to_first_non_primary(self) -> None:
        registry = registry_for(
            {
                "OPENAI_API_KEY": OPENAI_KEY,
                "GEMINI_API_KEY": GEMINI_KEY,
                "CLAUDE_API_KEY": CLAUDE_KEY,
                "LLM_PROVIDER": "openai",
            }
        )

        self.assertEqual(registry.resolve_fallback(), "gemini")

    def test_fallback_never_equals_primary(self) -> None:
        env = {
            "OPENAI_API_KEY": OPENAI_KEY,
            "GEMINI_API_KEY": GEMINI_KEY,
            "LLM_PROVIDER": "gemini",
            "LLM_FALLBACK_PROVIDER": "gemini",
        }
        registry = registry_for(env)

        self.assertEqual(registry.resolve_primary(), "gemini")
        self.assertEqual(registry.resolve_fallback(), "openai")

    def test_single_provider_fallback_preference_is_ignored(self) -> None:
        registry = registry_for({"OPENAI_API_KEY": OPENAI_KEY, "LLM_FALLBACK_PROVIDER": "openai"})

        self.assertEqual(registry.resolve_primary(), "openai")
        self.assertIsNone(registry.resolve_fallback())

    def test_environment_changes_apply_without_restart(self) -> None:
        registry = ProviderRegistry()
        env = {"OPENAI_API_KEY": OPENAI_KEY, "GEMINI_API_KEY": GEMINI_KEY}

        with patch.dict(os.environ, {**env, "LLM_PROVIDER": "openai"}, clear=True):
            self.assertEqual(registry.resolve_primary(), "openai")

        with patch.dict(os.environ, {**env, "LLM_PROVIDER": "gemini"}, clear=True):
            self.assertEqual(registry.resolve_primary(), "gemini")

        with patch.dict(os.environ, {"CLAUDE_API_KEY": CLAUDE_KEY}, clear=True):
            self.assertEqual(registry.list_available_providers(), ["claude"])


class ValidateTests(unittest.TestCase):
    def test_no_credentials_is_invalid_and_names_every_key_variable(self) -> None:
        registry = registry_for({})

        self.assertEqual(registry.list_available_providers(), [])
        report = registry.validate()

        self.assertFalse(report.is_valid)
        self.assertEqual(len(report.errors), 1)
        for env_var in ("OPENAI_API_KEY", "GEMINI_API_KEY", "CLAUDE_API_KEY"):
            self.assertIn(env_var, report.errors[0])

    def test_unavailable_primary_preference_is_a_warning(self) -> None:
        report = registry_for({"OPENAI_API_KEY": OPENAI_KEY, "LLM_PROVIDER": "claude"}).validate()

        self.assertTrue(report.is_valid)
        self.assertEqual(report.errors, [])
        self.assertEqual(len(report.warnings), 1)
        self.assertIn("LLM_PROVIDER", report.warnings[0])
        self.assertIn("claude", report.warnings[0])
        self.assertIn("Available providers: openai", report.warnings[0])

    def test_unavailable_fallback_preference_is_a_warning(self) -> None:
        report = registry_for(
            {"GEMINI_API_KEY": GEMINI_KEY, "LLM_FALLBACK_PROVIDER": "openai"}
        ).validate()

        self.assertTrue(report.is_valid)
        self.assertEqual(len(report.warnings), 1)
        self.assertIn("LLM_FALLBACK_PROVIDER", report.warnings[0])
        self.assertIn("'openai'", report.warnings[0])
        self.assertIn("gemini", report.warnings[0])

    def test_unknown_provider_name_is_reported(self) -> None:
        report = registry_for({"LLM_PROVIDER": "mistral"}).validate()

        self.assertFalse(report.is_valid)
        self.assertEqual(len(report.warnings), 1)
        self.assertIn("mistral", report.warnings[0])
        self.assertIn("Available providers: none", report.warnings[0])

    def test_available_preferences_produce_no_warnings(self) -> None:
        report = registry_for(
            {
                "OPENAI_API_KEY": OPENAI_KEY,
                "GEMINI_API_KEY": GEMINI_KEY,
                "LLM_PROVIDER": "gemini",
                "LLM_FALLBACK_PROVIDER": "openai",
            }
        ).validate()

        self.assertTrue(report.is_valid)
        self.assertEqual(report.warnings, [])

    def test_describe_summarizes_resolution(self) -> None:
        status = registry_for(
            {"OPENAI_API_KEY": OPENAI_KEY, "CLAUDE_API_KEY": CLAUDE_KEY}
        ).describe()

        self.assertTrue(status.is_valid)
        self.assertEqual(status.available_providers, ["openai", "claude"])
        self.assertEqual(status.primary_provider, "openai")
        self.assertEqual(status.fallback_provider, "claude")


if __name__ == "__main__":
    unittest.main()
