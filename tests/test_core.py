"""
Tests for pixtone core: pixel codec, image handle, walker, progress, config.
"""

import io
import json

import numpy as np
import pytest

from pixtone.core.errors import DomainError


class TestPacking:
    """Tests for packed pixel <-> RGBA."""

    def test_unpack(self):
        """Test channel extraction by bit masking."""
        from pixtone.core.pixel import unpack

        assert unpack(0x7F123456) == (0x12, 0x34, 0x56, 0x7F)
        assert unpack(0) == (0, 0, 0, 0)

    def test_unpack_ignores_high_bit(self):
        """Test that bit 31 is not part of alpha."""
        from pixtone.core.pixel import unpack

        assert unpack(0xFF000000).a == 0x7F

    def test_pack_inverse(self):
        """Test pack is the inverse of unpack."""
        from pixtone.core.pixel import pack, unpack

        for pixel in (0, 0x00FFFFFF, 0x7F000000, 0x3A80FF01):
            assert pack(*unpack(pixel)) == pixel

    def test_get_rgba_alias(self):
        """Test get_rgba matches unpack."""
        from pixtone.core.pixel import get_rgba, pack

        assert get_rgba(pack(1, 2, 3, 4)) == (1, 2, 3, 4)


class TestRgbToHsl:
    """Tests for RGB -> HSL."""

    def test_primaries(self):
        """Test hue of primary colors."""
        from pixtone.core.pixel import rgb_to_hsl

        assert rgb_to_hsl(255, 0, 0) == (0.0, 1.0, 1.0)
        h, s, l = rgb_to_hsl(0, 255, 0)
        assert h == pytest.approx(1 / 3)
        assert s == 1.0
        h, s, l = rgb_to_hsl(0, 0, 255)
        assert h == pytest.approx(2 / 3)

    def test_achromatic(self):
        """Test gray has zero hue and saturation."""
        from pixtone.core.pixel import rgb_to_hsl

        h, s, l = rgb_to_hsl(128, 128, 128)
        assert h == 0
        assert s == 0
        assert l == pytest.approx(128 / 255)

    def test_lightness_is_max_channel(self):
        """Test lightness is the brightest channel."""
        from pixtone.core.pixel import rgb_to_hsl

        h, s, l = rgb_to_hsl(51, 204, 102)
        assert l == pytest.approx(204 / 255)
        assert s == pytest.approx((204 - 51) / 204)

    def test_red_wins_tie(self):
        """Test red/green tie resolves through the red formula."""
        from pixtone.core.pixel import rgb_to_hsl

        h, s, l = rgb_to_hsl(255, 255, 0)
        assert h == pytest.approx(1 / 6)

    def test_hue_wraps_into_range(self):
        """Test negative raw hue wraps into [0, 1]."""
        from pixtone.core.pixel import rgb_to_hsl

        h, s, l = rgb_to_hsl(255, 0, 128)
        assert 0.0 <= h <= 1.0
        assert h > 0.8

    @pytest.mark.parametrize("rgb, name", [
        ((256, 0, 0), "red value"),
        ((0, -1, 0), "green value"),
        ((0, 0, 300), "blue value"),
    ])
    def test_out_of_range(self, rgb, name):
        """Test channel validation names the channel."""
        from pixtone.core.pixel import rgb_to_hsl

        with pytest.raises(DomainError, match=name):
            rgb_to_hsl(*rgb)

    def test_non_integer(self):
        """Test float channels are rejected."""
        from pixtone.core.pixel import rgb_to_hsl

        with pytest.raises(DomainError):
            rgb_to_hsl(1.5, 0, 0)

    def test_domain_error_is_value_error(self):
        """Test DomainError can be caught as ValueError."""
        from pixtone.core.pixel import rgb_to_hsl

        with pytest.raises(ValueError):
            rgb_to_hsl(256, 0, 0)

    @pytest.mark.parametrize("value", ["30", None, [1]])
    def test_check_range_non_numeric(self, value):
        """Test non-numeric values are a domain error naming the parameter."""
        from pixtone.core.errors import check_range

        with pytest.raises(DomainError, match="contrast value"):
            check_range("contrast value", value, -100, 100)


class TestHslToRgb:
    """Tests for HSL -> RGB."""

    def test_sectors(self):
        """Test one color from each sector boundary."""
        from pixtone.core.pixel import hsl_to_rgb

        assert hsl_to_rgb(0.0, 1.0, 1.0) == (255, 0, 0)
        assert hsl_to_rgb(2 / 6, 1.0, 1.0) == (0, 255, 0)
        assert hsl_to_rgb(3 / 6, 1.0, 1.0) == (0, 255, 255)

    def test_hue_one_matches_hue_zero(self):
        """Test h == 1.0 wraps to the same color as h == 0.0."""
        from pixtone.core.pixel import hsl_to_rgb

        for s, l in ((1.0, 1.0), (0.5, 0.8), (0.25, 0.3)):
            assert hsl_to_rgb(1.0, s, l) == hsl_to_rgb(0.0, s, l)

    def test_achromatic(self):
        """Test zero saturation gives gray."""
        from pixtone.core.pixel import hsl_to_rgb

        assert hsl_to_rgb(0.7, 0.0, 1.0) == (255, 255, 255)
        assert hsl_to_rgb(0.0, 0.0, 0.0) == (0, 0, 0)

    def test_truncates(self):
        """Test channels are truncated, not rounded."""
        from pixtone.core.pixel import hsl_to_rgb

        # 0.5 * 255 = 127.5
        assert hsl_to_rgb(0.0, 0.0, 0.5) == (127, 127, 127)

    def test_returns_ints(self):
        """Test result channels are plain ints."""
        from pixtone.core.pixel import hsl_to_rgb

        assert all(type(c) is int for c in hsl_to_rgb(0.3, 0.4, 0.5))

    @pytest.mark.parametrize("hsl, name", [
        ((1.01, 0.5, 0.5), "hue value"),
        ((0.5, -0.1, 0.5), "saturation value"),
        ((0.5, 0.5, 2.0), "lightness value"),
    ])
    def test_out_of_range(self, hsl, name):
        """Test component validation names the component."""
        from pixtone.core.pixel import hsl_to_rgb

        with pytest.raises(DomainError, match=name):
            hsl_to_rgb(*hsl)

    def test_round_trip_within_one(self):
        """Test RGB -> HSL -> RGB drifts at most one step per channel."""
        from pixtone.core.pixel import hsl_to_rgb, rgb_to_hsl

        levels = list(range(0, 256, 15))
        for r in levels:
            for g in levels:
                for b in levels:
                    out = hsl_to_rgb(*rgb_to_hsl(r, g, b))
                    assert abs(out[0] - r) <= 1, (r, g, b, out)
                    assert abs(out[1] - g) <= 1, (r, g, b, out)
                    assert abs(out[2] - b) <= 1, (r, g, b, out)


class TestGetHsla:
    """Tests for get_hsla."""

    def test_carries_raw_alpha(self):
        """Test alpha passes through unnormalized."""
        from pixtone.core.pixel import get_hsla, pack

        h, s, l, a = get_hsla(pack(255, 0, 0, 5))
        assert (h, s, l) == (0.0, 1.0, 1.0)
        assert a == 5


class TestAlphaBridge:
    """Tests for 8-bit <-> inverted 7-bit alpha."""

    def test_to_inverted(self):
        """Test conventional alpha maps to inverted alpha."""
        from pixtone.core.pixel import alpha_to_inverted

        result = alpha_to_inverted(np.array([255, 0, 128], dtype=np.uint8))
        assert result.tolist() == [0, 127, 63]

    def test_to_conventional(self):
        """Test inverted alpha maps back to 8 bits."""
        from pixtone.core.pixel import inverted_to_alpha

        result = inverted_to_alpha(np.array([0, 127], dtype=np.uint8))
        assert result.tolist() == [255, 0]

    def test_inverted_round_trip(self):
        """Test every 7-bit alpha survives a trip through 8 bits."""
        from pixtone.core.pixel import alpha_to_inverted, inverted_to_alpha

        a7 = np.arange(128, dtype=np.uint8)
        assert np.array_equal(alpha_to_inverted(inverted_to_alpha(a7)), a7)


class TestRasterImage:
    """Tests for the RasterImage handle."""

    def test_new(self):
        """Test solid image creation."""
        from pixtone.core.image import RasterImage

        image = RasterImage.new(3, 2, color=(10, 20, 30), alpha=7)
        assert image.width == 3
        assert image.height == 2
        assert image.shape == (2, 3)
        assert image.get_pixel(2, 1) == (7 << 24) | (10 << 16) | (20 << 8) | 30

    def test_set_get(self):
        """Test pixels are addressed as (x, y)."""
        from pixtone.core.image import RasterImage
        from pixtone.core.pixel import pack

        image = RasterImage.new(3, 2)
        image.set_pixel(2, 1, pack(1, 2, 3, 40))
        assert image.get_pixel(2, 1) == pack(1, 2, 3, 40)
        assert image.rgb[1, 2].tolist() == [1, 2, 3]
        assert image.alpha[1, 2] == 40
        assert image.get_pixel(0, 0) == 0

    def test_satisfies_protocol(self):
        """Test RasterImage is a PixelImage."""
        from pixtone.core.base import PixelImage
        from pixtone.core.image import RasterImage

        assert isinstance(RasterImage.new(1, 1), PixelImage)

    def test_rgba_conversion(self):
        """Test from_rgba/to_rgba with conventional alpha."""
        from pixtone.core.image import RasterImage

        rgba = np.zeros((1, 2, 4), dtype=np.uint8)
        rgba[0, 0] = (255, 0, 0, 255)
        rgba[0, 1] = (0, 0, 255, 0)
        image = RasterImage.from_rgba(rgba)
        assert image.alpha.tolist() == [[0, 127]]
        assert np.array_equal(image.to_rgba(), rgba)

    def test_rgb_only(self):
        """Test three-channel input is treated as opaque."""
        from pixtone.core.image import RasterImage

        image = RasterImage.from_rgba(np.full((2, 2, 3), 9, dtype=np.uint8))
        assert not image.has_transparency()

    def test_mismatched_buffers(self):
        """Test buffer validation."""
        from pixtone.core.image import RasterImage

        with pytest.raises(ValueError):
            RasterImage(np.zeros((2, 2, 3), np.uint8), np.zeros((3, 2), np.uint8))
        with pytest.raises(ValueError):
            RasterImage(np.zeros((2, 2), np.uint8), np.zeros((2, 2), np.uint8))

    def test_copy_is_independent(self):
        """Test copy() does not share buffers."""
        from pixtone.core.image import RasterImage

        image = RasterImage.new(2, 2)
        clone = image.copy()
        clone.set_pixel(0, 0, 0x00FFFFFF)
        assert image.get_pixel(0, 0) == 0


class TestImageIO:
    """Tests for decode/encode and file I/O."""

    def _sample(self):
        from pixtone.core.image import RasterImage

        rng = np.random.default_rng(7)
        rgb = rng.integers(0, 256, size=(4, 5, 3), dtype=np.uint8)
        alpha = rng.integers(0, 128, size=(4, 5), dtype=np.uint8)
        return RasterImage(rgb, alpha)

    def test_png_round_trip(self):
        """Test PNG keeps color and alpha exactly."""
        from pixtone.core.image import decode_image, encode_image

        image = self._sample()
        decoded = decode_image(encode_image(image, ".png"))
        assert np.array_equal(decoded.rgb, image.rgb)
        assert np.array_equal(decoded.alpha, image.alpha)

    def test_save_and_load(self, tmp_path):
        """Test saving and loading a PNG file."""
        from pixtone.core.image import load_image, save_image

        image = self._sample()
        path = save_image(image, tmp_path / "out.png")
        loaded = load_image(path)
        assert loaded.path == path
        assert np.array_equal(loaded.rgb, image.rgb)

    def test_jpeg_is_opaque(self, tmp_path):
        """Test JPEG output has no transparency left."""
        from pixtone.core.image import load_image, save_jpeg

        path = save_jpeg(self._sample(), tmp_path / "out.jpg", quality=95)
        loaded = load_image(path)
        assert loaded.width == 5
        assert loaded.height == 4
        assert not loaded.has_transparency()

    def test_jpeg_transparent_becomes_white(self):
        """Test fully transparent pixels flatten to white."""
        from pixtone.core.image import RasterImage, decode_image, encode_image

        image = RasterImage.new(8, 8, color=(0, 0, 0), alpha=127)
        decoded = decode_image(encode_image(image, ".jpg", quality=100))
        assert decoded.rgb.min() >= 250

    def test_flatten_on_white(self):
        """Test compositing over white."""
        from pixtone.core.image import RasterImage, flatten_on_white

        image = RasterImage.new(2, 1, color=(10, 20, 30))
        image.alpha[0, 1] = 127
        flat = flatten_on_white(image)
        assert flat[0, 0].tolist() == [10, 20, 30]
        assert flat[0, 1].tolist() == [255, 255, 255]

    def test_jpeg_quality_range(self):
        """Test JPEG quality validation."""
        from pixtone.core.image import encode_image

        with pytest.raises(DomainError, match="JPEG quality"):
            encode_image(self._sample(), ".jpg", quality=101)

    def test_unsupported_format(self):
        """Test unknown suffixes are rejected."""
        from pixtone.core.image import encode_image

        with pytest.raises(ValueError, match="Unsupported"):
            encode_image(self._sample(), ".gif")

    def test_decode_garbage(self):
        """Test undecodable bytes raise ValueError."""
        from pixtone.core.image import decode_image

        with pytest.raises(ValueError):
            decode_image(b"")

    def test_load_missing(self, tmp_path):
        """Test loading a missing file."""
        from pixtone.core.image import load_image

        with pytest.raises(FileNotFoundError):
            load_image(tmp_path / "missing.png")

    def test_decode_grayscale(self):
        """Test single-channel input expands to RGB."""
        import cv2
        from pixtone.core.image import decode_image

        gray = np.array([[0, 100], [200, 255]], dtype=np.uint8)
        ok, buf = cv2.imencode(".png", gray)
        assert ok
        image = decode_image(buf.tobytes())
        assert image.rgb[1, 0].tolist() == [200, 200, 200]
        assert not image.has_transparency()


class TestWalker:
    """Tests for the pixel walker."""

    def test_column_major_order(self):
        """Test x is the outer loop and y the inner one."""
        from pixtone.core.image import RasterImage
        from pixtone.core.walker import walk_pixels

        image = RasterImage.new(2, 3)
        visited = []

        def record(x, y):
            visited.append((x, y))
            return image.get_pixel(x, y)

        walk_pixels(image, record)
        assert visited == [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)]

    def test_writes_result(self):
        """Test the returned pixel is stored."""
        from pixtone.core.image import RasterImage
        from pixtone.core.pixel import pack
        from pixtone.core.walker import walk_pixels

        image = RasterImage.new(3, 2)
        walk_pixels(image, lambda x, y: pack(x, y, 7, 1))
        assert image.get_pixel(2, 1) == pack(2, 1, 7, 1)
        assert image.alpha.tolist() == [[1, 1, 1], [1, 1, 1]]

    def test_progress_ten_buckets(self, progress):
        """Test one notification per 10% of columns."""
        from pixtone.core.image import RasterImage
        from pixtone.core.walker import walk_pixels

        image = RasterImage.new(25, 1)
        walk_pixels(image, lambda x, y: 0, progress)
        assert progress.updates == [10, 20, 30, 40, 50, 60, 70, 80, 90, 100]

    def test_progress_narrow_image(self):
        """Test narrow images report fewer buckets."""
        from pixtone.core.walker import progress_buckets

        assert progress_buckets(3) == [10, 40, 70]
        assert progress_buckets(1) == [10]
        assert progress_buckets(0) == []

    def test_progress_not_per_pixel(self, progress):
        """Test tall images do not multiply notifications."""
        from pixtone.core.image import RasterImage
        from pixtone.core.walker import walk_pixels

        walk_pixels(RasterImage.new(10, 50), lambda x, y: 0, progress)
        assert len(progress.updates) == 10


class TestConsoleProgress:
    """Tests for the text progress reporter."""

    def test_bar(self):
        """Test a full pass renders a bar."""
        from pixtone.core.base import ConsoleProgress

        stream = io.StringIO()
        progress = ConsoleProgress(stream)
        progress.start("Shifting hue")
        progress.update(10)
        progress.update(20)
        progress.done()
        assert stream.getvalue() == "Shifting hue... [**] done.\n"

    def test_skip(self):
        """Test skipped operations."""
        from pixtone.core.base import ConsoleProgress

        stream = io.StringIO()
        progress = ConsoleProgress(stream)
        progress.start("Altering brightness")
        progress.skip()
        assert stream.getvalue() == "Altering brightness... skipping.\n"

    def test_disabled(self):
        """Test disabled reporter writes nothing."""
        from pixtone.core.base import ConsoleProgress

        stream = io.StringIO()
        progress = ConsoleProgress(stream, enabled=False)
        progress.start("Resizing")
        progress.done()
        assert stream.getvalue() == ""


class TestRecipeConfig:
    """Tests for recipe configuration."""

    def test_save_load(self, tmp_path):
        """Test recipes survive a JSON round trip."""
        from pixtone.core.config import GlobalSettings, Recipe, StepConfig, load_recipe

        recipe = Recipe(
            global_settings=GlobalSettings(verbose=True, jpeg_quality=70),
            steps=[StepConfig("hue", {"degrees": 90}), StepConfig("flip_vertical")],
            input="a.png",
            output="b.jpg",
        )
        path = tmp_path / "recipe.json"
        recipe.save(path)
        loaded = load_recipe(path)
        assert loaded == recipe

    def test_string_steps(self):
        """Test steps can be bare operation names."""
        from pixtone.core.config import parse_recipe

        recipe = parse_recipe({"steps": ["rotate_left", {"name": "hue", "params": {"degrees": 5}}]})
        assert [s.name for s in recipe.steps] == ["rotate_left", "hue"]
        assert recipe.steps[0].params == {}
        assert recipe.global_settings.jpeg_quality == 85

    def test_malformed_step(self):
        """Test steps without a name are rejected."""
        from pixtone.core.config import parse_recipe

        with pytest.raises(ValueError):
            parse_recipe({"steps": [{"params": {}}]})
        with pytest.raises(ValueError):
            parse_recipe({"steps": [{"name": "hue", "params": [1]}]})

    def test_missing_file(self, tmp_path):
        """Test loading a missing recipe."""
        from pixtone.core.config import load_recipe

        with pytest.raises(FileNotFoundError):
            load_recipe(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        """Test loading broken JSON."""
        from pixtone.core.config import load_recipe

        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(json.JSONDecodeError):
            load_recipe(path)

    def test_example_recipe(self, tmp_path):
        """Test the example recipe is loadable."""
        from pixtone.core.config import create_example_recipe, load_recipe

        path = tmp_path / "example.json"
        created = create_example_recipe(path)
        assert load_recipe(path) == created

    def test_env_config(self, monkeypatch):
        """Test prefixed environment variables are collected."""
        from pixtone.core.config import get_env_config

        monkeypatch.setenv("PIXTONE_VERBOSE", "true")
        assert get_env_config()["verbose"] == "true"

    def test_env_overrides(self):
        """Test environment overrides on settings."""
        from pixtone.core.config import GlobalSettings, apply_env_overrides

        settings = apply_env_overrides(
            GlobalSettings(), {"verbose": "yes", "jpeg_quality": "70"}
        )
        assert settings.verbose is True
        assert settings.jpeg_quality == 70

        with pytest.raises(ValueError):
            apply_env_overrides(GlobalSettings(), {"jpeg_quality": "high"})


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
