"""Shared test fixtures."""

from pathlib import Path

import pytest

from ruling_search.context import SearchContext, open_context
from ruling_search.core.store.sqlite_store import SqliteCollectionStore
from tests.unit.fakes import write_collection

# Reference collections carry an id column.
TZ_ROWS = [
    (1, "张三盗窃刑事判决书", "被告人张三犯盗窃罪，判处有期徒刑一年"),
    (2, "李四与王五民间借贷纠纷民事判决书", "原告李四诉称被告王五借款未还"),
    (7, "关于原告撤诉的裁定", "原告申请撤诉，本院予以准许"),
]

WL_ROWS = [
    (10, "赵六故意伤害刑事附带民事判决书", "被告人赵六与被害人发生争执"),
]

# The imported collection has no id column.
USER_ROWS = [
    ("甲诉乙民事纠纷", "甲方与乙方签订合同"),
    ("张三刑事案", "甲方与丙方发生冲突"),
]


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Return a directory holding all three collection databases."""
    root = tmp_path / "data"
    root.mkdir()
    write_collection(root / "tz-2020.db", TZ_ROWS, with_id=True)
    write_collection(root / "wl-2020.db", WL_ROWS, with_id=True)
    write_collection(root / "user_imported.db", USER_ROWS, with_id=False)
    return root


@pytest.fixture
def context(data_dir: Path) -> SearchContext:
    return open_context(data_dir)


@pytest.fixture
def user_store(tmp_path: Path) -> SqliteCollectionStore:
    """Return a store with a single writable, identifier-less collection."""
    path = tmp_path / "user.db"
    write_collection(path, USER_ROWS, with_id=False)
    return SqliteCollectionStore({"已导入数据": path}, writable=["已导入数据"])
