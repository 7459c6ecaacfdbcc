"""Unit tests for logging module."""

import io
import logging
import unittest

import descent


class CountingStep(descent.FixedStep):
    """Fixed step that counts how often it is formatted."""

    def __init__(self, step_width):
        super().__init__(step_width)
        self.formatted = 0

    def __repr__(self):
        self.formatted += 1
        return "CountingStep({})".format(self.step_width)


class test_get_logger(unittest.TestCase):
    """Unit tests for descent.logging.get_logger"""

    def tearDown(self):
        descent.logging.set_log_level(logging.WARNING)

    def test_namespace(self):
        """Test loggers are in the package namespace and cached."""
        logger = descent.logging.get_logger("test_module")
        self.assertIsInstance(logger, logging.Logger)
        self.assertEqual(logger.name, "descent.test_module")
        self.assertIs(descent.logging.get_logger("test_module"), logger)
        self.assertIs(descent.logging.get_logger("descent.test_module"), logger)
        self.assertEqual(descent.logging.get_logger().name, "descent")
        self.assertEqual(len(logger.handlers), 1)

    def test_set_log_level(self):
        """Test changing the level of all loggers."""
        logger = descent.logging.get_logger("descent.method")
        descent.logging.set_log_level("debug")
        self.assertEqual(logger.level, logging.DEBUG)
        self.assertEqual(logger.handlers[0].level, logging.DEBUG)

        descent.logging.set_log_level(logging.INFO)
        self.assertEqual(logger.level, logging.INFO)

        with self.assertRaises(ValueError):
            descent.logging.set_log_level("LOUD")

    def test_minimize_output(self):
        """Test minimizers report their progress."""
        logger = descent.logging.get_logger("descent.method")
        stream = io.StringIO()
        handler = logger.handlers[0]
        old_stream = handler.setStream(stream)
        try:
            descent.logging.set_log_level(logging.DEBUG)
            descent.GradientDescent(max_iter=2).minimize(
                descent.problems.Sphere(2), [1.0, 1.0]
            )
        finally:
            handler.setStream(old_stream)
        output = stream.getvalue()
        self.assertIn("Starting gradient descent", output)
        self.assertIn("Iteration", output)
        self.assertIn("descent.method", output)

    def test_lazy_messages(self):
        """Test messages are only formatted when their level is enabled."""
        line_search = CountingStep(0.25)
        gd = descent.GradientDescent(line_search=line_search, max_iter=3)
        descent.logging.set_log_level(logging.WARNING)
        gd.minimize(descent.problems.Sphere(2), [1.0, 1.0])
        self.assertEqual(line_search.formatted, 0)

        logger = descent.logging.get_logger("descent.method")
        handler = logger.handlers[0]
        old_stream = handler.setStream(io.StringIO())
        try:
            descent.logging.set_log_level(logging.INFO)
            gd.minimize(descent.problems.Sphere(2), [1.0, 1.0])
        finally:
            handler.setStream(old_stream)
        self.assertGreater(line_search.formatted, 0)


if __name__ == "__main__":
    unittest.main()
