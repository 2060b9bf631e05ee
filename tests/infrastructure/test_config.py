from unittest import TestCase
import unittest

from src.keynd.infrastructure._config import EngineConfig, get_config, set_config


class TestEngineConfig(TestCase):

    def tearDown(self):
        set_config(None)

    def test_defaults(self):
        cfg = EngineConfig.from_env({})
        self.assertEqual(cfg, EngineConfig())
        self.assertEqual(cfg.singular_tol, 1e-10)
        self.assertEqual(cfg.det_warn_order, 9)
        self.assertEqual(cfg.allclose_rtol, 1e-5)
        self.assertEqual(cfg.allclose_atol, 1e-8)

    def test_reads_prefixed_variables(self):
        cfg = EngineConfig.from_env(
            {
                "KEYND_SINGULAR_TOL": "1e-6",
                "KEYND_DET_WARN_ORDER": "5",
                "KEYND_ALLCLOSE_RTOL": "0.01",
                "KEYND_ALLCLOSE_ATOL": " 0.5 ",
                "SINGULAR_TOL": "123",
            }
        )
        self.assertEqual(cfg.singular_tol, 1e-6)
        self.assertEqual(cfg.det_warn_order, 5)
        self.assertEqual(cfg.allclose_rtol, 0.01)
        self.assertEqual(cfg.allclose_atol, 0.5)

    def test_blank_values_fall_back_to_defaults(self):
        cfg = EngineConfig.from_env({"KEYND_DET_WARN_ORDER": "  "})
        self.assertEqual(cfg.det_warn_order, 9)

    def test_invalid_values_name_the_variable(self):
        with self.assertRaises(ValueError) as ctx:
            EngineConfig.from_env({"KEYND_DET_WARN_ORDER": "many"})
        self.assertIn("KEYND_DET_WARN_ORDER", str(ctx.exception))

        with self.assertRaises(ValueError):
            EngineConfig.from_env({"KEYND_SINGULAR_TOL": "-1"})
        with self.assertRaises(ValueError):
            EngineConfig.from_env({"KEYND_DET_WARN_ORDER": "0"})

    def test_config_is_frozen(self):
        cfg = EngineConfig()
        with self.assertRaises(AttributeError):
            cfg.singular_tol = 1.0

    def test_set_and_get(self):
        custom = EngineConfig(det_warn_order=4)
        set_config(custom)
        self.assertIs(get_config(), custom)
        set_config(None)
        self.assertIsInstance(get_config(), EngineConfig)


if __name__ == "__main__":
    unittest.main()
