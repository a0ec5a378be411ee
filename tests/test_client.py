import unittest

from fakes import FakeChatClient, auth_error, connection_error, make_settings

from word2vec_explorer.client import WordRelationClient
from word2vec_explorer.config import Settings
from word2vec_explorer.errors import (
    AuthenticationFailure,
    ClientNotConfigured,
    EmptyInput,
    InvalidShape,
    MalformedResponse,
    TransportFailure,
)

TECHNOLOGY = [
    {"word": "technology", "x": 0, "y": 0},
    {"word": "innovation", "x": 10, "y": 5},
]


class WordRelationClientTests(unittest.IsolatedAsyncioTestCase):
    async def test_returns_validated_words(self):
        fake = FakeChatClient(TECHNOLOGY)
        client = WordRelationClient(settings=make_settings(), client=fake)

        words = await client.fetch_related_words("technology")

        self.assertEqual(len(words), 2)
        self.assertEqual(words[0].model_dump(), {"word": "technology", "x": 0, "y": 0})
        self.assertEqual(fake.call_count, 1)

    async def test_request_uses_prompt_model_and_low_temperature(self):
        fake = FakeChatClient(TECHNOLOGY)
        settings = make_settings(WORD2VEC_MODEL="gemini-test")
        client = WordRelationClient(settings=settings, client=fake)

        await client.fetch_related_words("  technology  ")

        call = fake.completions.calls[0]
        self.assertEqual(call["model"], "gemini-test")
        self.assertEqual(call["temperature"], 0.3)
        self.assertEqual(call["response_format"], {"type": "json_object"})
        self.assertIn("'technology'", call["messages"][0]["content"])
        self.assertNotIn("'  technology  '", call["messages"][0]["content"])

    async def test_json_mode_can_be_disabled(self):
        fake = FakeChatClient(TECHNOLOGY)
        client = WordRelationClient(settings=make_settings(WORD2VEC_JSON_MODE="false"), client=fake)

        await client.fetch_related_words("technology")

        self.assertNotIn("response_format", fake.completions.calls[0])

    async def test_missing_credential_fails_before_any_call(self):
        fake = FakeChatClient(TECHNOLOGY)
        client = WordRelationClient(settings=Settings(env={}), client=fake)

        with self.assertRaises(ClientNotConfigured) as ctx:
            await client.fetch_related_words("technology")

        self.assertFalse(ctx.exception.retriable)
        self.assertEqual(fake.call_count, 0)

    async def test_blank_word_fails_before_any_call(self):
        fake = FakeChatClient(TECHNOLOGY)
        client = WordRelationClient(settings=make_settings(), client=fake)

        with self.assertRaises(EmptyInput):
            await client.fetch_related_words("   ")
        self.assertEqual(fake.call_count, 0)

    async def test_identical_words_are_not_cached(self):
        fake = FakeChatClient(TECHNOLOGY)
        client = WordRelationClient(settings=make_settings(), client=fake)

        await client.fetch_related_words("technology")
        await client.fetch_related_words("technology")

        self.assertEqual(fake.call_count, 2)

    async def test_invalid_key_text_maps_to_authentication_failure(self):
        fake = FakeChatClient(error=RuntimeError("400 API key not valid. Please pass a valid API key."))
        client = WordRelationClient(settings=make_settings(), client=fake)

        with self.assertRaises(AuthenticationFailure) as ctx:
            await client.fetch_related_words("technology")

        self.assertIn("not valid", ctx.exception.user_message)
        self.assertEqual(ctx.exception.category, "authentication")
        self.assertEqual(fake.call_count, 1)

    async def test_sdk_authentication_error_maps_to_authentication_failure(self):
        client = WordRelationClient(settings=make_settings(), client=FakeChatClient(error=auth_error()))

        with self.assertRaises(AuthenticationFailure):
            await client.fetch_related_words("technology")

    async def test_connection_error_maps_to_generic_transport_failure(self):
        client = WordRelationClient(
            settings=make_settings(), client=FakeChatClient(error=connection_error())
        )

        with self.assertRaises(TransportFailure) as ctx:
            await client.fetch_related_words("technology")

        self.assertNotIsInstance(ctx.exception, AuthenticationFailure)
        self.assertEqual(ctx.exception.category, "transport")
        self.assertIn("generative API request", ctx.exception.user_message)
        self.assertNotEqual(
            ctx.exception.user_message, AuthenticationFailure.default_message
        )

    async def test_unparseable_reply_is_malformed(self):
        client = WordRelationClient(settings=make_settings(), client=FakeChatClient("hello world"))

        with self.assertRaises(MalformedResponse):
            await client.fetch_related_words("technology")

    async def test_empty_reply_is_malformed(self):
        client = WordRelationClient(settings=make_settings(), client=FakeChatClient(""))

        with self.assertRaises(MalformedResponse):
            await client.fetch_related_words("technology")

    async def test_wrong_shape_reply_is_invalid(self):
        fake = FakeChatClient([{"word": "technology", "x": "0", "y": 0}])
        client = WordRelationClient(settings=make_settings(), client=fake)

        with self.assertRaises(InvalidShape):
            await client.fetch_related_words("technology")

    async def test_client_stays_usable_after_a_failure(self):
        fake = FakeChatClient(error=connection_error())
        client = WordRelationClient(settings=make_settings(), client=fake)
        with self.assertRaises(TransportFailure):
            await client.fetch_related_words("technology")

        fake.completions.error = None
        fake.completions.content = '[{"word": "technology", "x": 0, "y": 0}]'
        words = await client.fetch_related_words("technology")

        self.assertEqual([w.word for w in words], ["technology"])


if __name__ == "__main__":
    unittest.main()
