"""Cross-checks against independent implementations (skipped when not installed)."""
import pytest

from mgrs2latlong.grid import convert
from mgrs2latlong.grid.projection import inverse_ups, inverse_utm

# ~1 m at mid latitudes
TOL_DEG = 1e-5

REFERENCES = [
    "18SUJ2337106519",
    "33TWM1234567890",
    "4QFJ1234567890",
    "23KPU1234567890",
    "35VMD1234567890",
    "60WVT5000050000",
    "33XVG5000050000",
    "31NEA0000000000",
    "ZGC1234567890",
    "ATN1234567890",
]


@pytest.mark.parametrize("text", REFERENCES)
def test_matches_mgrs_package(text):
    mgrs = pytest.importorskip("mgrs")
    exp_lat, exp_lon = mgrs.MGRS().toLatLon(text)
    res = convert(text)
    assert res.ok, res.error
    assert res.point.latitude == pytest.approx(exp_lat, abs=TOL_DEG)
    assert res.point.longitude == pytest.approx(exp_lon, abs=TOL_DEG)


@pytest.mark.parametrize(
    "zone,hemi,easting,northing",
    [
        (33, "N", 512_345, 5_167_890),
        (33, "N", 200_000, 6_650_000),  # 300 km west of the central meridian
        (18, "N", 323_371, 4_306_519),
        (23, "S", 612_345, 7_867_890),
        (1, "S", 600_000, 1_200_000),
        (60, "N", 450_000, 8_900_000),
    ],
)
def test_inverse_utm_matches_pyproj(zone, hemi, easting, northing):
    pyproj = pytest.importorskip("pyproj")
    epsg = (32600 if hemi == "N" else 32700) + zone
    tr = pyproj.Transformer.from_crs(f"EPSG:{epsg}", "EPSG:4326", always_xy=True)
    exp_lon, exp_lat = tr.transform(easting, northing)
    lat, lon = inverse_utm(zone, hemi, easting, northing)
    assert lat == pytest.approx(exp_lat, abs=1e-7)
    assert lon == pytest.approx(exp_lon, abs=1e-7)


@pytest.mark.parametrize(
    "hemi,easting,northing",
    [
        ("N", 2_412_345, 1_567_890),
        ("N", 1_500_000, 2_300_000),
        ("S", 1_412_345, 2_067_890),
        ("S", 2_700_000, 1_800_000),
    ],
)
def test_inverse_ups_matches_pyproj(hemi, easting, northing):
    pyproj = pytest.importorskip("pyproj")
    epsg = 32661 if hemi == "N" else 32761
    tr = pyproj.Transformer.from_crs(f"EPSG:{epsg}", "EPSG:4326", always_xy=True)
    exp_lon, exp_lat = tr.transform(easting, northing)
    lat, lon = inverse_ups(hemi, easting, northing)
    assert lat == pytest.approx(exp_lat, abs=1e-7)
    assert lon == pytest.approx(exp_lon, abs=1e-7)
