# tests/test_listing.py
import math
from urllib.parse import parse_qs, urlsplit

from starlette.datastructures import URL

from catalog.models import Product
from catalog.products import ListingQuery, add_page_links, paginate_products

from conftest import SAMPLE_PRODUCTS

PRODUCTS = [Product.model_validate(p) for p in SAMPLE_PRODUCTS]


def ids(page):
    return [p.id for p in page.payload]


def test_category_is_case_insensitive():
    page = paginate_products(PRODUCTS, ListingQuery(category="BOOKS"))
    assert ids(page) == ["p1", "p2", "p4"]
    assert all(p.category.lower() == "books" for p in page.payload)


def test_availability_filter():
    assert ids(paginate_products(PRODUCTS, ListingQuery(availability="false"))) == ["p2"]
    assert ids(paginate_products(PRODUCTS, ListingQuery(availability="TRUE"))) == ["p1", "p3", "p4"]


def test_query_matches_title_substring():
    assert ids(paginate_products(PRODUCTS, ListingQuery(query="pYtHoN"))) == ["p1", "p4"]
    # description is not searched
    assert ids(paginate_products(PRODUCTS, ListingQuery(query="recipes"))) == []


def test_filters_combine():
    page = paginate_products(PRODUCTS, ListingQuery(category="books", availability="true", query="python"))
    assert ids(page) == ["p1", "p4"]


def test_sort_by_price():
    asc = paginate_products(PRODUCTS, ListingQuery(sort="asc")).payload
    desc = paginate_products(PRODUCTS, ListingQuery(sort="desc")).payload
    assert [p.price for p in asc] == sorted(p.price for p in PRODUCTS)
    assert [p.price for p in desc] == sorted((p.price for p in PRODUCTS), reverse=True)


def test_unknown_sort_keeps_storage_order():
    assert ids(paginate_products(PRODUCTS, ListingQuery(sort="price"))) == ["p1", "p2", "p3", "p4"]


def test_page_arithmetic():
    for limit in (1, 2, 3, 4, 5):
        total_pages = math.ceil(len(PRODUCTS) / limit)
        for page in range(1, total_pages + 1):
            result = paginate_products(PRODUCTS, ListingQuery(limit=limit, page=page))
            assert result.total_pages == total_pages
            assert len(result.payload) <= limit
            assert result.has_prev_page == (page > 1)
            assert result.has_next_page == (page < total_pages)
            assert (result.prev_page is None) == (not result.has_prev_page)
            assert (result.next_page is None) == (not result.has_next_page)
        last = paginate_products(PRODUCTS, ListingQuery(limit=limit, page=total_pages))
        assert len(last.payload) == len(PRODUCTS) - limit * (total_pages - 1)


def test_limit_and_page_are_clamped():
    result = paginate_products(PRODUCTS, ListingQuery(limit=0, page=-3))
    assert result.page == 1
    assert result.total_pages == 4
    assert ids(result) == ["p1"]


def test_page_past_the_end_is_empty():
    result = paginate_products(PRODUCTS, ListingQuery(limit=2, page=5))
    assert result.payload == []
    assert result.has_prev_page is True
    assert result.prev_page == 4
    assert result.has_next_page is False


def test_empty_store():
    result = paginate_products([], ListingQuery())
    assert result.payload == []
    assert result.total_pages == 0
    assert result.has_next_page is False
    assert result.has_prev_page is False


def test_links_keep_the_query():
    url = URL("http://testserver/api/products?category=books&limit=1&page=2")
    result = add_page_links(paginate_products(PRODUCTS, ListingQuery(category="books", limit=1, page=2)), url, 1)

    prev = urlsplit(result.prev_link)
    assert f"{prev.scheme}://{prev.netloc}{prev.path}" == "http://testserver/api/products"
    assert parse_qs(prev.query) == {"category": ["books"], "limit": ["1"], "page": ["1"]}
    assert parse_qs(urlsplit(result.next_link).query)["page"] == ["3"]


def test_no_links_at_boundaries():
    url = URL("http://testserver/api/products")
    result = add_page_links(paginate_products(PRODUCTS, ListingQuery(limit=10)), url, 10)
    assert result.prev_link is None
    assert result.next_link is None
