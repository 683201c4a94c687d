"""Unit tests for ContentService."""

from uuid import uuid4

import pytest

from radar.domain.error import NotFoundError
from radar.domain.repository import PlayerCommentRepository, ReplyRepository
from radar.domain.service import ContentService
from radar.domain.value import PlayerId, ThreadId, UserId, VotableType
from tests.conftest import make_comment, make_reply
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestRepositoryDispatch:
    @pytest.mark.asyncio
    async def test_each_type_maps_to_its_repository(self, unit_env):
        service = await unit_env.get(ContentService)

        assert service.repository_for(VotableType.REPLY) is await unit_env.get(
            ReplyRepository
        )
        assert service.repository_for(
            VotableType.PLAYER_COMMENT
        ) is await unit_env.get(PlayerCommentRepository)


class TestGetContent:
    @pytest.mark.asyncio
    async def test_finds_reply(self, unit_env):
        # Arrange
        service = await unit_env.get(ContentService)
        reply_repo = await unit_env.get(ReplyRepository)
        reply = await reply_repo.save(make_reply(ThreadId(uuid4()), UserId(uuid4())))

        # Act
        found = await service.get_content(VotableType.REPLY, reply.id)

        # Assert
        assert found == reply
        assert found.votable_type == VotableType.REPLY

    @pytest.mark.asyncio
    async def test_deleted_items_are_still_returned(self, unit_env):
        service = await unit_env.get(ContentService)
        comment_repo = await unit_env.get(PlayerCommentRepository)
        comment = await comment_repo.save(
            make_comment(PlayerId(uuid4()), UserId(uuid4())).model_copy(
                update={"is_deleted": True}
            )
        )

        found = await service.get_content(VotableType.PLAYER_COMMENT, comment.id)

        assert found.is_deleted is True

    @pytest.mark.asyncio
    async def test_reply_id_is_not_found_as_comment(self, unit_env):
        service = await unit_env.get(ContentService)
        reply_repo = await unit_env.get(ReplyRepository)
        reply = await reply_repo.save(make_reply(ThreadId(uuid4()), UserId(uuid4())))

        with pytest.raises(NotFoundError, match="Comment"):
            await service.get_content(VotableType.PLAYER_COMMENT, reply.id)
