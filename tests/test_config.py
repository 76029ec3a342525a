import unittest
import json
import os
import shutil
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from cavegen.core.config import (
    BSPConfig, CellAutomataConfig, ConfigError, DrunkardWalkConfig, EvaluationRule,
    build_config, load_config,
)
from cavegen.algo.base import GeneratorType
from cavegen.algo.bsp import BSPGenerator
from cavegen.algo.factory import create_generator


class TestConfig(unittest.TestCase):
    def setUp(self):
        os.makedirs("test_out", exist_ok=True)

    def tearDown(self):
        shutil.rmtree("test_out", ignore_errors=True)

    def write(self, name, payload):
        path = os.path.join("test_out", name)
        with open(path, "w", encoding="utf-8") as f:
            if isinstance(payload, str):
                f.write(payload)
            else:
                json.dump(payload, f)
        return path

    def test_defaults_are_valid(self):
        CellAutomataConfig().validate()
        DrunkardWalkConfig().validate()
        BSPConfig().validate()

    def test_validation(self):
        with self.assertRaises(ConfigError):
            CellAutomataConfig(wall_probability=-0.1)
        with self.assertRaises(ConfigError):
            CellAutomataConfig(min_walls=-1)
        with self.assertRaises(ConfigError):
            BSPConfig(min_room_width=20, max_room_width=10)
        with self.assertRaises(ConfigError):
            BSPConfig(empty_room_probability=2.0)
        with self.assertRaises(ConfigError):
            BSPConfig(max_depth=-2)

    def test_rule_by_name(self):
        self.assertEqual(CellAutomataConfig(rule="extended").rule, EvaluationRule.EXTENDED)
        self.assertEqual(CellAutomataConfig(rule=0).rule, EvaluationRule.BASIC)

    def test_unknown_keys(self):
        with self.assertRaises(ConfigError):
            build_config(DrunkardWalkConfig, {"ratio": 0.5})

    def test_load_config(self):
        path = self.write("cave.json", {
            "seed": 17,
            "cellular_automata": {"wall_probability": 0.5, "rule": "extended"},
            "bsp": {"min_width": 12, "min_height": 12, "min_room_width": 4,
                    "min_room_height": 4, "max_room_width": 10, "max_room_height": 10},
        })
        loaded = load_config(path)

        self.assertEqual(loaded["seed"], 17)
        self.assertEqual(loaded["cellular_automata"].wall_probability, 0.5)
        self.assertEqual(loaded["cellular_automata"].rule, EvaluationRule.EXTENDED)
        self.assertEqual(loaded["drunkard_walk"], DrunkardWalkConfig())
        self.assertEqual(loaded["bsp"].max_room_width, 10)

    def test_load_config_errors(self):
        with self.assertRaises(ConfigError):
            load_config(self.write("bad_section.json", {"dungeon": {}}))
        with self.assertRaises(ConfigError):
            load_config(self.write("bad_json.json", "{not json"))
        with self.assertRaises(ConfigError):
            load_config(self.write("bad_value.json", {"drunkard_walk": {"expected_ratio": 1.5}}))
        with self.assertRaises(ConfigError):
            load_config(self.write("bad_rule.json", {"cellular_automata": {"rule": "fancy"}}))
        with self.assertRaises(ConfigError):
            load_config(self.write("bad_seed.json", {"seed": [1, 2]}))
        with self.assertRaises(ConfigError):
            load_config(self.write("bool_seed.json", {"seed": True}))

    def test_factory(self):
        gen = create_generator(GeneratorType.BSP, seed=3)
        self.assertIsInstance(gen, BSPGenerator)
        self.assertEqual(gen.kind(), GeneratorType.BSP)

        gen = create_generator(1, DrunkardWalkConfig(expected_ratio=0.3))
        self.assertEqual(gen.config.expected_ratio, 0.3)

        with self.assertRaises(TypeError):
            create_generator(GeneratorType.BSP, DrunkardWalkConfig())

    def test_generators_do_not_share_rng(self):
        a = create_generator(GeneratorType.CELL_AUTOMATA, seed=1)
        b = create_generator(GeneratorType.CELL_AUTOMATA, seed=1)
        self.assertIsNot(a.rng, b.rng)


if __name__ == '__main__':
    unittest.main()
