import pytest

from tumblrcrawl.exceptions import ExtractionError, TransportError
from tumblrcrawl.services.photoset_resolver import PhotosetResolver

SET_URL = "https://blog.tumblr.com/post/1/photoset_iframe"


def test_resolves_photos_in_frame_order(site):
    site.add_photoset(SET_URL, [("30", "u30"), ("10", "u10"), ("20", "u20")])
    photos = PhotosetResolver(site).resolve_photoset(SET_URL)
    assert [p.photo_id for p in photos] == ["30", "10", "20"]
    assert [p.photo_url for p in photos] == ["u30", "u10", "u20"]
    assert all(p.tags == () and p.author == "" for p in photos)


def test_sends_configured_headers(site):
    site.add_photoset(SET_URL, [("1", "u1")])
    PhotosetResolver(site, headers={"X-Requested-With": "XMLHttpRequest"}).resolve_photoset(SET_URL)
    assert site.calls == [("GET", SET_URL, {"X-Requested-With": "XMLHttpRequest"})]


def test_empty_photoset_returns_empty_list(site):
    site.add(SET_URL, "<html><body></body></html>")
    assert PhotosetResolver(site).resolve_photoset(SET_URL) == []


def test_anchor_without_expected_id_raises(site):
    site.add(
        SET_URL,
        "<a class='photoset_photo' id='photoset_link_1'><img src='u1'></a>"
        "<a class='photoset_photo' id='something_else'><img src='u2'></a>",
    )
    with pytest.raises(ExtractionError, match="something_else"):
        PhotosetResolver(site).resolve_photoset(SET_URL)


def test_anchor_without_image_raises(site):
    site.add(SET_URL, "<a class='photoset_photo' id='photoset_link_1'></a>")
    with pytest.raises(ExtractionError):
        PhotosetResolver(site).resolve_photoset(SET_URL)


def test_transport_errors_propagate(site):
    with pytest.raises(TransportError):
        PhotosetResolver(site).resolve_photoset(SET_URL)
