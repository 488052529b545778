import unittest

from chuck.core import Command, classify
from chuck.core.commands import parse_temperature


class TestClassify(unittest.TestCase):
    def test_control_tokens(self):
        self.assertIs(classify("sys").command, Command.DIRECTIVE_TOGGLE)
        self.assertIs(classify("?").command, Command.HELP)
        self.assertIs(classify("??").command, Command.DUMP_STATE)
        for word in ("ok", "reset", "new", "RESET"):
            self.assertIs(classify(word).command, Command.RESET)
        for word in ("bye", "exit", "quit", "q", "Bye"):
            self.assertIs(classify(word).command, Command.EXIT)

    def test_input_is_trimmed(self):
        turn = classify("  What is a monad?  ")
        self.assertIs(turn.command, Command.QUESTION)
        self.assertEqual(turn.text, "What is a monad?")
        self.assertIs(classify("  q ").command, Command.EXIT)

    def test_empty_line(self):
        self.assertIs(classify("").command, Command.EMPTY)
        self.assertIs(classify("   ").command, Command.EMPTY)

    def test_directive_mode(self):
        turn = classify("You are a pirate", directive_mode=True)
        self.assertIs(turn.command, Command.SET_DIRECTIVE)
        self.assertEqual(turn.text, "You are a pirate")

        self.assertIs(classify("", directive_mode=True).command, Command.SET_DIRECTIVE)
        # Control tokens keep their priority over directive entry
        self.assertIs(classify("bye", directive_mode=True).command, Command.EXIT)
        self.assertIs(classify("@1.0", directive_mode=True).command, Command.SET_DIRECTIVE)

    def test_temperature_token(self):
        turn = classify("@1.5")
        self.assertIs(turn.command, Command.SET_TEMPERATURE)
        self.assertEqual(turn.temperature, 1.5)

    def test_invalid_temperature_is_a_question(self):
        for line in ("@2.5", "@abc", "@1", "@1.25", "@1.5 tell me more"):
            turn = classify(line)
            self.assertIs(turn.command, Command.QUESTION, line)
            self.assertEqual(turn.text, line)


class TestParseTemperature(unittest.TestCase):
    def test_values(self):
        self.assertEqual(parse_temperature("@0.0"), 0.0)
        self.assertEqual(parse_temperature("@2.0"), 2.0)
        self.assertIsNone(parse_temperature("@2.1"))
        self.assertIsNone(parse_temperature("@nan"))
        self.assertIsNone(parse_temperature("1.5"))
