import unittest

from chuck.core import Conversation, Message, Role, TurnHistory
from chuck.core.conversation import DIRECTIVE_PREFIX, TEMPERATURE_PREFIX


class TestConversation(unittest.TestCase):
    def setUp(self):
        self.conversation = Conversation()

    def test_submit_user_records_question_and_history(self):
        messages = self.conversation.submit_user("Hello")

        self.assertEqual(messages, [{"role": "user", "content": "Hello"}])
        self.assertEqual(self.conversation.transcript, [Message(Role.USER, "Hello")])
        self.assertEqual(self.conversation.history.entries, ["Hello"])

    def test_complete_assistant_ignores_empty_answers(self):
        self.conversation.submit_user("Hello")
        self.conversation.complete_assistant("")
        self.conversation.complete_assistant(None)
        self.assertEqual(len(self.conversation.transcript), 1)

        self.conversation.complete_assistant("Hi there!")
        self.assertEqual(self.conversation.transcript[-1], Message(Role.ASSISTANT, "Hi there!"))

    def test_transcript_length_and_order(self):
        ops = [("user", "q1"), ("assistant", "a1"), ("assistant", ""), ("user", "q2"), ("assistant", "a2")]

        def replay():
            conversation = Conversation()
            for kind, text in ops:
                if kind == "user":
                    conversation.submit_user(text)
                else:
                    conversation.complete_assistant(text)
            return conversation.transcript

        transcript = replay()
        self.assertEqual([m.content for m in transcript], ["q1", "a1", "q2", "a2"])
        self.assertEqual(transcript, replay())

    def test_directive_is_prepended_but_not_stored_in_transcript(self):
        self.conversation.set_directive("be concise")
        messages = self.conversation.submit_user("What is Python?")

        self.assertEqual(messages[0], {"role": "system", "content": "be concise"})
        self.assertEqual(messages[1], {"role": "user", "content": "What is Python?"})
        self.assertTrue(all(m.role is not Role.SYSTEM for m in self.conversation.transcript))

    def test_replacing_directive_keeps_only_one(self):
        self.conversation.set_directive("be concise")
        self.conversation.set_directive("be verbose")
        messages = self.conversation.submit_user("Hi")

        system = [m for m in messages if m["role"] == "system"]
        self.assertEqual(system, [{"role": "system", "content": "be verbose"}])

    def test_empty_directive_clears_it_without_touching_history(self):
        self.conversation.set_directive("be concise")
        self.conversation.set_directive("")
        messages = self.conversation.submit_user("Hi")

        self.assertIsNone(self.conversation.directive)
        self.assertEqual(messages, [{"role": "user", "content": "Hi"}])
        self.assertEqual(self.conversation.history.entries, ["Hi", "be concise"])

    def test_temperature_range(self):
        self.assertFalse(self.conversation.set_temperature(2.5))
        self.assertIsNone(self.conversation.temperature)
        self.assertFalse(self.conversation.set_temperature(-0.1))

        self.assertTrue(self.conversation.set_temperature(1.5))
        self.assertIn(f"{TEMPERATURE_PREFIX}1.5", self.conversation.snapshot_state())

        self.assertTrue(self.conversation.set_temperature(0.0))
        self.assertTrue(self.conversation.set_temperature(2.0))
        self.assertEqual(self.conversation.temperature, 2.0)

    def test_unparsable_temperature_is_rejected(self):
        self.conversation.set_temperature(0.4)
        for value in ("warm", None, "", "nan"):
            self.assertFalse(self.conversation.set_temperature(value), value)
        self.assertEqual(self.conversation.temperature, 0.4)

        self.assertTrue(self.conversation.set_temperature("1.2"))
        self.assertEqual(self.conversation.temperature, 1.2)

    def test_snapshot_lists_settings_then_questions(self):
        self.conversation.set_temperature(0.7)
        self.conversation.set_directive("be concise")
        self.conversation.submit_user("q1")
        self.conversation.complete_assistant("a1")
        self.conversation.submit_user("q2")

        self.assertEqual(
            self.conversation.snapshot_state(),
            [f"{TEMPERATURE_PREFIX}0.7", f"{DIRECTIVE_PREFIX}be concise", "q1", "q2"],
        )

    def test_clear_resets_everything_but_history(self):
        history = TurnHistory()
        conversation = Conversation(history)
        conversation.set_temperature(1.0)
        conversation.set_directive("be concise")
        conversation.submit_user("q1")
        conversation.complete_assistant("a1")

        conversation.clear()

        self.assertEqual(conversation.snapshot_state(), [])
        self.assertEqual(conversation.transcript, [])
        self.assertIsNone(conversation.directive)
        self.assertIsNone(conversation.temperature)
        self.assertIs(conversation.history, history)
        self.assertEqual(history.entries, ["q1", "be concise"])

    def test_clear_on_fresh_conversation(self):
        self.conversation.clear()
        self.assertEqual(self.conversation.snapshot_state(), [])
