from __future__ import annotations

import unittest

from misc.commands.registry import CommandRegistry
from misc.commands.registry import SlashCommand


async def _noop(interaction, deps, **options):
    return None


class CommandRegistryTests(unittest.TestCase):
    def test_lookup_by_name(self):
        registry = CommandRegistry([SlashCommand("ask", "Ask", _noop), SlashCommand("ping", "Ping", _noop)])
        self.assertEqual(registry.names(), ["ask", "ping"])
        self.assertIn("ask", registry)
        self.assertEqual(registry.get("ping").description, "Ping")
        self.assertIsNone(registry.get("missing"))
        self.assertEqual(len(registry), 2)

    def test_registry_cannot_be_mutated(self):
        registry = CommandRegistry([SlashCommand("ask", "Ask", _noop)])
        with self.assertRaises(TypeError):
            registry.commands["other"] = SlashCommand("other", "Other", _noop)

    def test_duplicate_names_rejected(self):
        with self.assertRaises(ValueError):
            CommandRegistry([SlashCommand("ask", "Ask", _noop), SlashCommand("ask", "Again", _noop)])


if __name__ == "__main__":
    unittest.main()
