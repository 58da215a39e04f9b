from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from infrastructure.repositories import NamedRecord, ProductRecord, ProfileRecord, RecordNotFound, RepositoryError
from infrastructure.storage.interface import StorageException, StorageFile
from marketplace.catalog.domain.services.catalog_filter import ALL, FilterSelection
from marketplace.catalog.domain.services.catalog_service import CatalogService
from marketplace.services.base import ErrorCodes, service_err, service_ok


def make_product(n, college="North Campus", **overrides):
    fields = dict(
        id=f"p-{n}",
        title=f"Product {n}",
        description="Lightly used",
        price=Decimal("12.50"),
        seller_id="seller-1",
        category_id="cat-1",
        seller_college=college,
    )
    fields.update(overrides)
    return ProductRecord(**fields)


def upload_image(name="photo.PNG", content_type="image/png"):
    image = MagicMock()
    image.name = name
    image.content_type = content_type
    return image


@pytest.fixture
def mock_products():
    return MagicMock()


@pytest.fixture
def mock_profiles():
    return MagicMock()


@pytest.fixture
def mock_taxonomy():
    taxonomy = MagicMock()
    taxonomy.get_category.return_value = service_ok(NamedRecord(id="cat-1", name="Books"))
    taxonomy.discard_category.return_value = service_ok(True)
    return taxonomy


@pytest.fixture
def mock_storage():
    storage = MagicMock()
    storage.upload.side_effect = lambda file, path, content_type: StorageFile(key=path, content_type=content_type)
    storage.get_url.side_effect = lambda key: f"https://cdn.example.com/{key}"
    return storage


@pytest.fixture
def catalog_service(mock_products, mock_profiles, mock_taxonomy, mock_storage):
    return CatalogService(
        products=mock_products, profiles=mock_profiles, taxonomy=mock_taxonomy, storage=mock_storage
    )


@pytest.mark.unit
class TestBrowse:
    def test_browse_defaults_college_to_viewer_profile(self, catalog_service, mock_products, mock_profiles):
        mock_products.list_active.return_value = [make_product(1), make_product(2, college="South Campus")]
        mock_profiles.get.return_value = ProfileRecord(
            id="viewer", email="v@example.com", full_name="V", mobile_number="1", college="South Campus"
        )

        result = catalog_service.browse(FilterSelection(), viewer_id="viewer")

        assert result.ok is True
        assert [p.id for p in result.value["results"]] == ["p-2"]
        assert result.value["count"] == 1
        assert result.value["filters"]["college"] == "South Campus"

    def test_browse_explicit_all_shows_every_college(self, catalog_service, mock_products, mock_profiles):
        mock_products.list_active.return_value = [make_product(1), make_product(2, college="South Campus")]
        mock_profiles.get.return_value = ProfileRecord(
            id="viewer", email="v@example.com", full_name="V", mobile_number="1", college="South Campus"
        )

        result = catalog_service.browse(FilterSelection.from_params({"college": ALL}), viewer_id="viewer")

        assert result.value["count"] == 2

    def test_browse_anonymous_skips_profile(self, catalog_service, mock_products, mock_profiles):
        mock_products.list_active.return_value = [make_product(1)]

        result = catalog_service.browse(FilterSelection())

        assert result.ok is True
        mock_profiles.get.assert_not_called()

    def test_browse_without_profile_still_loads(self, catalog_service, mock_products, mock_profiles):
        mock_products.list_active.return_value = [make_product(1)]
        mock_profiles.get.side_effect = RecordNotFound("no profile")

        result = catalog_service.browse(FilterSelection(), viewer_id="viewer")

        assert result.ok is True
        assert result.value["filters"]["college"] == ALL

    def test_browse_database_failure(self, catalog_service, mock_products):
        mock_products.list_active.side_effect = RepositoryError("down")

        result = catalog_service.browse(FilterSelection())

        assert result.ok is False
        assert result.error == ErrorCodes.DATABASE_ERROR


@pytest.mark.unit
class TestProductReads:
    def test_get_product_not_found(self, catalog_service, mock_products):
        mock_products.get.side_effect = RecordNotFound("missing")

        result = catalog_service.get_product("p-9")

        assert result.error == ErrorCodes.PRODUCT_NOT_FOUND

    def test_list_seller_products(self, catalog_service, mock_products):
        mock_products.list_by_seller.return_value = [make_product(1, status="sold")]

        result = catalog_service.list_seller_products("seller-1")

        assert result.ok is True
        mock_products.list_by_seller.assert_called_once_with("seller-1")

    def test_image_urls_skips_unresolvable_paths(self, catalog_service, mock_storage):
        def get_url(key):
            if key == "bad.jpg":
                raise StorageException("nope")
            return f"https://cdn.example.com/{key}"

        mock_storage.get_url.side_effect = get_url
        product = make_product(1, image_paths=("a.jpg", "bad.jpg", "b.jpg"))

        assert catalog_service.image_urls(product) == [
            "https://cdn.example.com/a.jpg",
            "https://cdn.example.com/b.jpg",
        ]


@pytest.mark.unit
class TestCreateProduct:
    def test_create_with_existing_category_and_images(self, catalog_service, mock_products, mock_storage):
        mock_products.insert.side_effect = lambda **kw: make_product(1, image_paths=tuple(kw["image_paths"]))

        result = catalog_service.create_product(
            "seller-1",
            title=" Desk Lamp ",
            description="Bright",
            price="15",
            category_id="cat-1",
            images=[upload_image(), upload_image("back.jpeg", "image/jpeg")],
        )

        assert result.ok is True
        kwargs = mock_products.insert.call_args.kwargs
        assert kwargs["title"] == "Desk Lamp"
        assert kwargs["price"] == Decimal("15.00")
        assert kwargs["category_id"] == "cat-1"
        assert len(kwargs["image_paths"]) == 2
        assert kwargs["image_paths"][0].startswith("seller-1/")
        assert kwargs["image_paths"][0].endswith("-0.png")
        assert kwargs["image_paths"][1].endswith("-1.jpeg")
        assert mock_storage.upload.call_count == 2

    def test_create_with_new_category(self, catalog_service, mock_products, mock_taxonomy):
        mock_taxonomy.ensure_category.return_value = service_ok((NamedRecord(id="cat-new", name="Bikes"), True))
        mock_products.insert.return_value = make_product(1, category_id="cat-new")

        result = catalog_service.create_product(
            "seller-1", title="Bike", description="Red", price=Decimal("80"), new_category="Bikes"
        )

        assert result.ok is True
        mock_taxonomy.ensure_category.assert_called_once_with("Bikes")
        assert mock_products.insert.call_args.kwargs["category_id"] == "cat-new"

    def test_category_required(self, catalog_service, mock_products):
        result = catalog_service.create_product("seller-1", title="Bike", description="Red", price="80")

        assert result.error == ErrorCodes.VALIDATION_ERROR
        mock_products.insert.assert_not_called()

    @pytest.mark.parametrize("price", [None, "", "abc", "-1", "NaN", "100000000"])
    def test_invalid_price_rejected(self, catalog_service, mock_products, price):
        result = catalog_service.create_product(
            "seller-1", title="Bike", description="Red", price=price, category_id="cat-1"
        )

        assert result.error == ErrorCodes.VALIDATION_ERROR
        mock_products.insert.assert_not_called()

    def test_blank_title_rejected(self, catalog_service):
        result = catalog_service.create_product(
            "seller-1", title="   ", description="Red", price="1", category_id="cat-1"
        )

        assert result.error == ErrorCodes.VALIDATION_ERROR

    def test_unknown_category_id(self, catalog_service, mock_taxonomy):
        mock_taxonomy.get_category.return_value = service_err(ErrorCodes.CATEGORY_NOT_FOUND, "missing")

        result = catalog_service.create_product(
            "seller-1", title="Bike", description="Red", price="1", category_id="nope"
        )

        assert result.error == ErrorCodes.CATEGORY_NOT_FOUND

    def test_insert_failure_rolls_back_images_and_new_category(
        self, catalog_service, mock_products, mock_taxonomy, mock_storage
    ):
        mock_taxonomy.ensure_category.return_value = service_ok((NamedRecord(id="cat-new", name="Bikes"), True))
        mock_products.insert.side_effect = RepositoryError("insert failed")

        result = catalog_service.create_product(
            "seller-1",
            title="Bike",
            description="Red",
            price="80",
            new_category="Bikes",
            images=[upload_image(), upload_image()],
        )

        assert result.error == ErrorCodes.DATABASE_ERROR
        assert mock_storage.delete.call_count == 2
        mock_taxonomy.discard_category.assert_called_once_with("cat-new")

    def test_existing_category_not_discarded_on_failure(self, catalog_service, mock_products, mock_taxonomy):
        mock_taxonomy.ensure_category.return_value = service_ok((NamedRecord(id="cat-1", name="Books"), False))
        mock_products.insert.side_effect = RepositoryError("insert failed")

        catalog_service.create_product("seller-1", title="Bike", description="Red", price="80", new_category="Books")

        mock_taxonomy.discard_category.assert_not_called()

    def test_upload_failure_removes_earlier_uploads(self, catalog_service, mock_products, mock_storage):
        uploads = []

        def upload(file, path, content_type):
            if uploads:
                raise StorageException("bucket unavailable")
            uploads.append(path)
            return StorageFile(key=path, content_type=content_type)

        mock_storage.upload.side_effect = upload

        result = catalog_service.create_product(
            "seller-1",
            title="Bike",
            description="Red",
            price="80",
            category_id="cat-1",
            images=[upload_image(), upload_image()],
        )

        assert result.error == ErrorCodes.STORAGE_ERROR
        mock_storage.delete.assert_called_once_with(uploads[0])
        mock_products.insert.assert_not_called()


@pytest.mark.unit
class TestCreateProductFor:
    def test_unknown_seller(self, catalog_service, mock_profiles, mock_products):
        mock_profiles.get.side_effect = RecordNotFound("missing")

        result = catalog_service.create_product_for(
            "ghost", title="Bike", description="Red", price="80", category_id="cat-1"
        )

        assert result.error == ErrorCodes.USER_NOT_FOUND
        mock_products.insert.assert_not_called()

    def test_lists_for_given_seller(self, catalog_service, mock_profiles, mock_products):
        mock_profiles.get.return_value = ProfileRecord(
            id="seller-2", email="s@example.com", full_name="S", mobile_number="1"
        )
        mock_products.insert.return_value = make_product(1, seller_id="seller-2")

        result = catalog_service.create_product_for(
            "seller-2", title="Bike", description="Red", price="80", category_id="cat-1"
        )

        assert result.ok is True
        assert mock_products.insert.call_args.kwargs["seller_id"] == "seller-2"
