"""Vote transition engine.

Pure state machine for one (user, post) pair. Given the user's current
ledger state and the vote they request, it yields the next ledger state
and the counter deltas to apply to the post. No I/O happens here, so the
table can be tested without a store.
"""

from agriforum.domain.value import VoteState, VoteTransition, VoteType

# (current, requested) -> (next, upvotes delta, downvotes delta)
TRANSITIONS: dict[tuple[VoteState, VoteType], tuple[VoteState, int, int]] = {
    (VoteState.NONE, VoteType.UP): (VoteState.UP, 1, 0),
    (VoteState.NONE, VoteType.DOWN): (VoteState.DOWN, 0, 1),
    (VoteState.UP, VoteType.UP): (VoteState.NONE, -1, 0),
    (VoteState.UP, VoteType.DOWN): (VoteState.DOWN, -1, 1),
    (VoteState.DOWN, VoteType.DOWN): (VoteState.NONE, 0, -1),
    (VoteState.DOWN, VoteType.UP): (VoteState.UP, 1, -1),
}


def compute_transition(current: VoteState, requested: VoteType) -> VoteTransition:
    """Compute the next ledger state and counter deltas.

    Repeating the vote the user already holds toggles it off; requesting the
    opposite vote switches it in place.

    Args:
        current: The user's current ledger state on the post
        requested: The vote the user asked for

    Returns:
        The transition to persist

    Raises:
        ValueError: If the inputs are not members of the closed enums
    """
    try:
        next_state, upvotes_delta, downvotes_delta = TRANSITIONS[
            (VoteState(current), VoteType(requested))
        ]
    except (KeyError, ValueError) as e:
        raise ValueError(
            f"Unsupported vote transition: {current!r} -> {requested!r}"
        ) from e

    return VoteTransition(
        previous=VoteState(current),
        requested=VoteType(requested),
        next=next_state,
        upvotes_delta=upvotes_delta,
        downvotes_delta=downvotes_delta,
    )
