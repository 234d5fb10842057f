import pytest

from mgrs2latlong.pipeline import (
    PipelineError,
    PipelineStats,
    format_degrees,
    geocode_rows,
    output_fields,
    output_header,
)

HEADER = ["id", "name", "grid", "note"]


def make_rows():
    return [
        {"id": "1", "name": "alpha", "grid": "33TWM1234567890", "note": "ok"},
        {"id": "2", "name": "bravo", "grid": "33TWM123456789", "note": "odd digits"},
        {"id": "3", "name": "charlie", "grid": "18S UJ 23371 06519", "note": ""},
    ]


def test_end_to_end_keeps_every_row_and_column():
    stats = PipelineStats()
    out = list(geocode_rows(HEADER, make_rows(), stats=stats))

    assert len(out) == 3
    assert output_header(HEADER) == HEADER + ["latitude", "longitude"]
    for src, row in zip(make_rows(), out):
        for k in HEADER:
            assert row[k] == src[k]

    assert float(out[0]["latitude"]) == pytest.approx(46.664, abs=0.01)
    assert float(out[0]["longitude"]) == pytest.approx(15.161, abs=0.01)
    assert out[1]["latitude"] == "" and out[1]["longitude"] == ""
    assert float(out[2]["latitude"]) == pytest.approx(38.8895, abs=2e-3)

    assert stats.column == "grid"
    assert (stats.rows, stats.converted, stats.failed, stats.blank) == (3, 2, 1, 0)


def test_blank_values_pass_through():
    rows = make_rows()
    rows[2]["grid"] = "   "
    stats = PipelineStats()
    out = list(geocode_rows(HEADER, rows, stats=stats))
    assert out[2]["latitude"] == ""
    assert stats.blank == 1


def test_no_column_detected_passes_rows_through():
    rows = [{"a": "1", "b": "x"}, {"a": "2", "b": "y"}]
    stats = PipelineStats()
    out = list(geocode_rows(["a", "b"], rows, stats=stats))
    assert out == [
        {"a": "1", "b": "x", "latitude": "", "longitude": ""},
        {"a": "2", "b": "y", "latitude": "", "longitude": ""},
    ]
    assert stats.column is None
    assert stats.rows == 2


def test_require_column_raises_before_any_row():
    with pytest.raises(PipelineError, match="no MGRS-like column"):
        geocode_rows(["a"], [{"a": "1"}], require_column=True)


def test_strict_mode_stops_on_bad_value():
    it = geocode_rows(HEADER, make_rows(), strict=True)
    first = next(it)
    assert first["latitude"] != ""
    with pytest.raises(PipelineError, match="row 2"):
        next(it)


def test_column_override():
    rows = [{"a": "33TWM1234567890", "b": "18SUJ2337106519"}]
    out = list(geocode_rows(["a", "b"], rows, column="b"))
    assert float(out[0]["longitude"]) == pytest.approx(-77.0353, abs=2e-3)

    with pytest.raises(PipelineError, match="not found"):
        geocode_rows(["a", "b"], rows, column="c")


def test_detection_uses_sample_then_converts_remaining_rows():
    rows = [{"grid": "33TWM1234567890"}] + [{"grid": "18SUJ2337106519"}] * 5
    stats = PipelineStats()
    out = list(geocode_rows(["grid"], iter(rows), sample_size=1, stats=stats))
    assert len(out) == 6
    assert stats.converted == 6


def test_existing_latitude_column_gets_prefixed_names():
    header = ["latitude", "grid"]
    assert output_fields(header) == ("mgrs_latitude", "mgrs_longitude")
    out = list(geocode_rows(header, [{"latitude": "old", "grid": "33TWM1234567890"}]))
    assert out[0]["latitude"] == "old"
    assert out[0]["mgrs_latitude"] != ""


def test_prefixed_names_never_overwrite_input_columns():
    header = ["latitude", "mgrs_latitude", "grid"]
    assert output_fields(header) == ("mgrs_mgrs_latitude", "mgrs_mgrs_longitude")
    assert output_fields(["mgrs_longitude", "longitude"]) == ("mgrs_mgrs_latitude", "mgrs_mgrs_longitude")

    row = {"latitude": "old", "mgrs_latitude": "KEEP", "grid": "33TWM1234567890"}
    (out,) = list(geocode_rows(header, [row]))
    assert out["latitude"] == "old"
    assert out["mgrs_latitude"] == "KEEP"
    assert float(out["mgrs_mgrs_latitude"]) == pytest.approx(46.664, abs=0.01)

    names = output_header(header)
    assert len(names) == len(set(names)) == len(header) + 2


def test_decimals_rounding():
    out = list(geocode_rows(["grid"], [{"grid": "31NEA0000000000"}], decimals=4))
    assert out[0]["latitude"] in ("0.0000", "-0.0000")
    assert out[0]["longitude"] == "3.0000"


def test_format_degrees_round_trips_by_default():
    v = 46.66412345678901
    assert float(format_degrees(v)) == v
    assert format_degrees(-77.03531, 2) == "-77.04"


def test_input_rows_are_not_mutated():
    rows = make_rows()
    list(geocode_rows(HEADER, rows))
    assert rows == make_rows()
