"""
Demo records written by the database initialiser.
"""
from typing import List, Tuple

from todoboard.models import TodoItem, TodoList

ADMINISTRATOR_ROLE = "Administrator"
ADMINISTRATOR_USER_NAME = "administrator@localhost"
ADMINISTRATOR_EMAIL = "administrator@localhost"
ADMINISTRATOR_PASSWORD = "Administrator1!"

BIG_LIST_TITLE = "Big List (for pagination) 🔢"
BIG_LIST_SIZE = 35

# (list title, [(item title, done), ...])
SAMPLE_LISTS: List[Tuple[str, List[Tuple[str, bool]]]] = [
    (
        "Todo List",
        [
            ("Make a todo list 📃", False),
            ("Check off the first item ✅", False),
            ("Realise you've already done two things on the list! 🤯", False),
            ("Reward yourself with a nice, long nap 🏆", False),
        ],
    ),
    (
        "Home 🏠",
        [
            ("Buy groceries", False),
            ("Clean kitchen", True),
            ("Fix the leaking faucet", False),
            ("Organize wardrobe", False),
            ("Water plants", True),
            ("Walk the dog", False),
        ],
    ),
    (
        "Work 💼",
        [
            ("Answer support tickets", False),
            ("Write API docs", True),
            ("Refactor authentication module", False),
            ("Prepare sprint demo", False),
            ("Review PR #1421", False),
            ("Fix flaky unit tests", True),
            ("Plan next sprint backlog", False),
            ("Create health checks for services", False),
        ],
    ),
    (
        "Study 📚",
        [
            ("Finish Angular 19 signals module", False),
            ("Practice RxJS marble tests", False),
            ("Read about Clean Architecture", False),
            ("Solve 5 LeetCode problems", True),
            ("Watch EF Core performance talk", False),
            ("Try out Tailwind plugins", False),
            ("Create POC with .NET 9 AOT", False),
            ("Review PostgreSQL indexing strategies", False),
            ("Build small gRPC sample", False),
            ("Document personal notes", False),
        ],
    ),
]


def build_sample_lists() -> List[TodoList]:
    """Return fresh, unsaved TodoList objects for the demo data."""
    lists = [
        TodoList(title=title, items=[TodoItem(title=item, done=done) for item, done in items])
        for title, items in SAMPLE_LISTS
    ]

    big_list = TodoList(title=BIG_LIST_TITLE)
    for i in range(1, BIG_LIST_SIZE + 1):
        big_list.items.append(TodoItem(title=f"Task #{i:02d}", done=False))
    lists.append(big_list)

    return lists
