import json

import pytest

from fingerprints import TAKEOVER_FINGERPRINTS, classify, classify_all, load_fingerprints
from models import FetchResult, Finding, Fingerprint

def test_canonical_order():
    assert [fp.name for fp in TAKEOVER_FINGERPRINTS] == ["AWS", "GitHub Pages", "Readme.io"]

def test_classify_match():
    r = FetchResult("http://bucket.s3.amazonaws.com", b"<Code>NoSuchBucket</Code>", 404)
    assert classify(TAKEOVER_FINGERPRINTS[0], r) == Finding("AWS", "http://bucket.s3.amazonaws.com", 404)

def test_classify_no_match():
    r = FetchResult("http://clean.example.com", b"<html>hello</html>", 200)
    assert classify_all(r) == []

def test_failed_result_never_matches():
    r = FetchResult("http://x.example.com", b"NoSuchBucket", None, error="boom")
    assert classify_all(r) == []

def test_status_refinement():
    fp = Fingerprint("Heroku", "No such app", status=(404,))
    assert classify(fp, FetchResult("http://a", b"No such app", 404))
    assert classify(fp, FetchResult("http://a", b"No such app", 200)) is None

def test_body_can_match_several():
    body = b"NoSuchBucket ... Project doesnt exist... yet!"
    found = classify_all(FetchResult("http://multi.example.com", body, 404))
    assert [f.service for f in found] == ["AWS", "Readme.io"]
    assert all(f.host == "http://multi.example.com" for f in found)

def test_finding_line():
    assert Finding("GitHub Pages", "http://abandoned.github.io").line() == "[+] GitHub Pages: http://abandoned.github.io"

def test_load_fingerprints(tmp_path):
    p = tmp_path / "fp.json"
    p.write_text(json.dumps([
        {"name": "Heroku", "body": "No such app"},
        {"name": "Shopify", "body": "Sorry, this shop is currently unavailable", "status": 404},
    ]))
    fps = load_fingerprints(str(p))
    assert fps == [
        Fingerprint("Heroku", "No such app"),
        Fingerprint("Shopify", "Sorry, this shop is currently unavailable", (404,)),
    ]

@pytest.mark.parametrize("content", [
    "not json",
    json.dumps({"name": "x", "body": "y"}),
    json.dumps([{"name": "x"}]),
    json.dumps([{"body": "y"}]),
    json.dumps([{"name": "x", "body": "y", "status": "404"}]),
])
def test_load_fingerprints_rejects_bad_files(tmp_path, content):
    p = tmp_path / "fp.json"
    p.write_text(content)
    with pytest.raises(ValueError):
        load_fingerprints(str(p))
