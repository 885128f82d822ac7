"""
Tests for the folder read helpers in crud_folder.

Covers filtering (including IN and IS NULL lookups), pagination, ordering,
child counts and slug prefix lookups.
"""

import pytest
import pytest_asyncio
from app.db.crud.crud_folder import (
    count_children,
    count_folders,
    get_children,
    get_folder,
    get_folders,
    get_slugs_with_prefix,
)


@pytest_asyncio.fixture
async def sample_folders(make_folder):
    """
    Creates a hierarchical folder structure for testing.

    - Root folders (parent_id=None): Products, Marketing, Archive
    - Children of Products: Shoes, Bags
    - Child of Shoes: Sneakers
    """
    products = await make_folder("Products", slug="products")
    marketing = await make_folder("Marketing", slug="marketing")
    archive = await make_folder("Archive", slug="archive")
    shoes = await make_folder("Shoes", parent_id=products.id, slug="shoes")
    bags = await make_folder("Bags", parent_id=products.id, slug="bags")
    sneakers = await make_folder("Sneakers", parent_id=shoes.id, slug="sneakers")
    return {
        "products": products,
        "marketing": marketing,
        "archive": archive,
        "shoes": shoes,
        "bags": bags,
        "sneakers": sneakers,
    }


@pytest.mark.asyncio
class TestGetFoldersFiltering:
    async def test_no_filters_returns_all_ordered_by_name(self, db_session, sample_folders):
        folders = await get_folders(db_session)

        assert [f.name for f in folders] == [
            "Archive",
            "Bags",
            "Marketing",
            "Products",
            "Shoes",
            "Sneakers",
        ]

    async def test_filter_by_single_id(self, db_session, sample_folders):
        folder = await get_folders(db_session, id=sample_folders["bags"].id, first=True)

        assert folder.name == "Bags"

    async def test_filter_by_id_list(self, db_session, sample_folders):
        ids = [sample_folders["bags"].id, sample_folders["archive"].id]

        folders = await get_folders(db_session, id=ids)

        assert {f.name for f in folders} == {"Bags", "Archive"}

    async def test_filter_by_slug(self, db_session, sample_folders):
        folder = await get_folders(db_session, slug="sneakers", first=True)

        assert folder.id == sample_folders["sneakers"].id

    async def test_filter_root_folders(self, db_session, sample_folders):
        roots = await get_folders(db_session, parent_id=None)

        assert {f.name for f in roots} == {"Products", "Marketing", "Archive"}

    async def test_filter_by_parent_list(self, db_session, sample_folders):
        parents = [sample_folders["products"].id, sample_folders["shoes"].id]

        folders = await get_folders(db_session, parent_id=parents)

        assert {f.name for f in folders} == {"Shoes", "Bags", "Sneakers"}

    async def test_first_returns_none_when_missing(self, db_session):
        assert await get_folders(db_session, id=99999, first=True) is None


@pytest.mark.asyncio
class TestGetFoldersPaginationAndOrdering:
    async def test_limit_and_offset(self, db_session, sample_folders):
        page = await get_folders(db_session, limit=2, offset=2)

        assert [f.name for f in page] == ["Marketing", "Products"]

    async def test_descending_order(self, db_session, sample_folders):
        folders = await get_folders(db_session, order_direction="desc", limit=1)

        assert folders[0].name == "Sneakers"

    async def test_invalid_order_field_raises(self, db_session):
        with pytest.raises(ValueError, match="Invalid order_by field"):
            await get_folders(db_session, order_by="nope")

    async def test_invalid_direction_raises(self, db_session):
        with pytest.raises(ValueError, match="order_direction"):
            await get_folders(db_session, order_direction="sideways")

    async def test_negative_limit_raises(self, db_session):
        with pytest.raises(ValueError, match="limit"):
            await get_folders(db_session, limit=-1)


@pytest.mark.asyncio
class TestHierarchyHelpers:
    async def test_get_folder(self, db_session, sample_folders):
        folder = await get_folder(db_session, sample_folders["shoes"].id)

        assert folder.parent_id == sample_folders["products"].id

    async def test_get_children(self, db_session, sample_folders):
        children = await get_children(db_session, sample_folders["products"].id)

        assert [c.name for c in children] == ["Bags", "Shoes"]

    async def test_count_children_is_direct_only(self, db_session, sample_folders):
        assert await count_children(db_session, sample_folders["products"].id) == 2
        assert await count_children(db_session, sample_folders["shoes"].id) == 1
        assert await count_children(db_session, sample_folders["sneakers"].id) == 0

    async def test_count_folders(self, db_session, sample_folders):
        assert await count_folders(db_session) == 6


@pytest.mark.asyncio
class TestSlugsWithPrefix:
    async def test_matches_base_and_suffixed_slugs(self, db_session, make_folder):
        await make_folder("Photos", slug="photos")
        await make_folder("Photos", slug="photos-1")
        await make_folder("Photos", slug="photos-2")
        await make_folder("Photography", slug="photography")

        slugs = await get_slugs_with_prefix(db_session, "photos")

        assert slugs == {"photos", "photos-1", "photos-2"}

    async def test_excludes_given_folder(self, db_session, make_folder):
        own = await make_folder("Photos", slug="photos")
        await make_folder("Photos", slug="photos-1")

        slugs = await get_slugs_with_prefix(db_session, "photos", exclude_id=own.id)

        assert slugs == {"photos-1"}

    async def test_no_matches(self, db_session):
        assert await get_slugs_with_prefix(db_session, "nothing") == set()
