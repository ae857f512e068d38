"""Group-Creation Saga — create a group, bind its creator, undo the group on failure.

Invariants:
    - Group row is inserted before the membership that references it
    - Step 1 (insert_group) failure: no compensation, the error propagates as-is
    - Step 2 (insert_membership) failure: delete_group runs exactly once, then the
      ORIGINAL membership error propagates
    - A failing compensating delete is logged as CompensationError (orphaned group)
      and never replaces the original error
    - No step is retried

Design Decisions:
    - Saga over a DB transaction: the store offers single statements only
    - Explicit SagaState with history: the terminal state and path are inspectable
      after run() for logs and tests
    - Cancellation between step 1 and step 2 is not compensated; this leaves the
      same orphaned group a failed delete would
"""

import logging

from grouphub.core.domain_types import GroupId, SagaState, UserId, ensure_kind
from grouphub.core.errors import CompensationError, ErrorContext
from grouphub.core.repository_protocols import RelationshipStore

logger = logging.getLogger(__name__)


class GroupCreationSaga:
    """Two-step saga: insert group, insert creator membership."""

    def __init__(self, store: RelationshipStore):
        self.store = store
        self.state = SagaState.START
        self.history: list[SagaState] = [SagaState.START]
        self.group_id: GroupId | None = None
        self.compensation_error: CompensationError | None = None

    def _transition(self, state: SagaState, ctx: ErrorContext) -> None:
        self.state = state
        self.history.append(state)
        logger.debug(
            f"Group creation saga -> {state.value}",
            extra={**ctx.log_extra(), "saga_state": state.value},
        )

    async def run(self, name: str, creator_id: UserId) -> GroupId:
        ensure_kind(creator_id, UserId)
        ctx = ErrorContext(operation="create_group", user_id=str(creator_id))

        try:
            group_id = await self.store.insert_group(name)
        except Exception:
            self._transition(SagaState.FAILED, ctx)
            logger.error(
                f"Failed to create group: name={name}",
                extra={**ctx.log_extra(), "saga_state": SagaState.FAILED.value},
            )
            raise
        self.group_id = group_id
        ctx.group_id = str(group_id)
        self._transition(SagaState.GROUP_CREATED, ctx)

        try:
            await self.store.insert_membership(creator_id, group_id)
        except Exception:
            logger.error(
                "Failed to bind creator to new group, compensating",
                extra={**ctx.log_extra(), "saga_state": self.state.value},
            )
            self._transition(SagaState.COMPENSATING_DELETE, ctx)
            await self._compensate(group_id, ctx)
            self._transition(SagaState.FAILED, ctx)
            raise

        self._transition(SagaState.MEMBERSHIP_BOUND, ctx)
        logger.info(
            f"Group created: name={name}",
            extra={**ctx.log_extra(), "saga_state": self.state.value},
        )
        return group_id

    async def _compensate(self, group_id: GroupId, ctx: ErrorContext) -> None:
        try:
            await self.store.delete_group(group_id)
        except Exception as e:
            # TODO: hand orphaned group ids to a reconciliation job once one exists
            self.compensation_error = CompensationError(str(group_id), e, ctx)
            logger.error(
                self.compensation_error.message,
                extra={
                    **ctx.log_extra(),
                    "saga_state": self.state.value,
                    "error_code": self.compensation_error.code,
                },
                exc_info=e,
            )


async def create_group(
    store: RelationshipStore, name: str, creator_id: UserId,
) -> GroupId:
    """Create a group with its creator as the first member."""
    return await GroupCreationSaga(store).run(name, creator_id)


async def add_member(
    store: RelationshipStore, user_id: UserId, group_id: GroupId,
) -> None:
    """Bind an existing user to an existing group. No pre-check, no compensation."""
    await store.insert_membership(user_id, group_id)
    logger.info(
        "Member added to group",
        extra={
            "operation": "add_member",
            "user_id": str(user_id),
            "group_id": str(group_id),
        },
    )
