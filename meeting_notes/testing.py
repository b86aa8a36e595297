from langchain_core.language_models.fake_chat_models import FakeListChatModel

TEST_SUMMARY = "- The team reviewed the release plan.\n- Action item: update the docs."


def build_test_chat_model(*responses: str) -> FakeListChatModel:
    """Chat model that answers with the given responses in turn, cycling."""
    return FakeListChatModel(responses=list(responses) or [TEST_SUMMARY])
