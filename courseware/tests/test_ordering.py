"""
Dense ordering under longer operation sequences.

A deterministic pseudo-random walk of inserts, moves and deletes is run
against one course; after every step the chapter orders must read 1..N and
match a plain Python list that applies the same operations.
"""
import random

import pytest

from courseware.services.ordering import OrderedSiblings
from courseware.orm.chapter import Chapter


async def current(client, course_id):
    response = await client.get("/api/chapters", params={"courseId": course_id})
    return [(c["id"], c["order"]) for c in response.json()["chapters"]]


@pytest.mark.parametrize("seed", [1, 7, 42])
async def test_random_operation_sequence_keeps_orders_dense(client, catalog, seed):
    rng = random.Random(seed)
    course_id = await catalog.course()
    expected = []  # chapter ids in position order

    for step in range(30):
        action = rng.choice(["insert", "insert", "move", "delete"]) if expected else "insert"

        if action == "insert":
            position = rng.randint(1, len(expected) + 1)
            chapter_id = await catalog.chapter(course_id, position, f"step {step}")
            expected.insert(position - 1, chapter_id)
        elif action == "move":
            chapter_id = rng.choice(expected)
            position = rng.randint(1, len(expected))
            response = await client.put(f"/api/chapters/{chapter_id}", json={"order": position})
            assert response.status_code == 200
            expected.remove(chapter_id)
            expected.insert(position - 1, chapter_id)
        else:
            chapter_id = rng.choice(expected)
            response = await client.delete(f"/api/chapters/{chapter_id}")
            assert response.status_code == 204
            expected.remove(chapter_id)

        rows = await current(client, course_id)
        assert [order for _, order in rows] == list(range(1, len(expected) + 1))
        assert [chapter_id for chapter_id, _ in rows] == expected


async def test_rejected_move_leaves_orders_untouched(client, catalog):
    course_id = await catalog.course()
    ids = [await catalog.chapter(course_id, i) for i in (1, 2)]

    response = await client.put(f"/api/chapters/{ids[0]}", json={"order": 5})
    assert response.status_code == 400
    assert await current(client, course_id) == [(ids[0], 1), (ids[1], 2)]


async def test_engine_works_directly_on_a_session(session_factory, catalog):
    course_id = await catalog.course()
    siblings = OrderedSiblings(Chapter, "course_id", kind="chapter")

    async with session_factory() as session:
        first = await siblings.insert(session, course_id, 1, {"name": "First"})
        second = await siblings.insert(session, course_id, 1, {"name": "Second"})
        await session.commit()

        rows = await siblings.list(session, course_id)
        assert [(c.name, c.order) for c in rows] == [("Second", 1), ("First", 2)]

        await siblings.move(session, first, position=1)
        await session.commit()
        rows = await siblings.list(session, course_id)
        assert [c.id for c in rows] == [first.id, second.id]
