from tidy_data.decoding import decode_bytes, newline_counts


def test_latin1_input_is_decoded():
    raw = "name,city\nPaul,Montréal\n".encode("latin-1")
    text, report = decode_bytes(raw)
    assert "Montréal" in text
    assert report["detected"] is not None


def test_utf8_bom_is_stripped():
    text, report = decode_bytes(b"\xef\xbb\xbfname,city\nAnn,Oslo\n")
    assert text.startswith("name")
    assert report["decode_used"] == "utf-8-sig"
    assert report["decode_fallback"] is False


def test_newline_counts():
    assert newline_counts("a\r\nb\rc\nd") == {"crlf": 1, "cr": 1, "lf": 1}
