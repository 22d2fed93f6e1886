"""Tests for the picture-tool command line."""

import json
from pathlib import Path

import pytest
from picture_kit.__main__ import main
from PIL import Image


@pytest.fixture
def images_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    d = tmp_path / 'images'
    d.mkdir()
    img = Image.new('RGB', (2, 1))
    img.putdata([(255, 0, 0), (0, 0, 255)])
    img.save(d / 'pair.png')
    # keep .env discovery inside tmp_path
    (tmp_path / '.git').mkdir()
    monkeypatch.chdir(tmp_path)
    return d


class TestCli:
    def test_invert_and_save(self, images_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(['--images-dir', str(images_dir), 'invert', 'pair.png', '-o', 'out.png'])
        with Image.open(images_dir / 'out.png') as img:
            assert img.convert('RGB').getpixel((0, 0)) == (0, 255, 255)
            assert img.convert('RGB').getpixel((1, 0)) == (255, 255, 0)
        captured = capsys.readouterr()
        assert 'applied: invert' in captured.out
        assert 'saved' in captured.err

    def test_rotate_json(self, images_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(['--images-dir', str(images_dir), 'rotate', 'pair.png', '--json'])
        obj = json.loads(capsys.readouterr().out)
        assert obj['dimensions'] == {'width': 1, 'height': 2}
        assert obj['operations'] == ['rotate']

    def test_info(self, images_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(['--images-dir', str(images_dir), 'info', 'pair.png'])
        out = capsys.readouterr().out
        assert 'pair.png (2×1)' in out
        assert 'unique colours: 2' in out

    def test_images_dir_from_env_file(self, images_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        env_file = images_dir.parent / 'picture.env'
        env_file.write_text(f'PICTURE_IMAGES_DIR={images_dir}\n')
        with pytest.MonkeyPatch.context() as mp:
            mp.setenv('PICTURE_IMAGES_DIR', '')
            mp.delenv('PICTURE_IMAGES_DIR')
            main(['--env-file', str(env_file), 'info', 'pair.png', '-j'])
            assert json.loads(capsys.readouterr().out)['pixels'] == 2

    def test_missing_image(self, images_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc:
            main(['--images-dir', str(images_dir), 'mirror', 'missing.png'])
        assert exc.value.code == 1
        assert 'Image not found' in capsys.readouterr().err

    def test_help_lists_operations(self, images_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(['help'])
        out = capsys.readouterr().out
        for name in ('invert', 'grayscale', 'mirror', 'rotate'):
            assert name in out

    def test_help_for_operation(self, images_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(['help', 'invert'])
        assert 'XORed with 0x00FFFFFF' in capsys.readouterr().out

    def test_help_unknown(self, images_dir: Path) -> None:
        with pytest.raises(SystemExit):
            main(['help', 'sharpen'])

    def test_no_command(self, images_dir: Path) -> None:
        with pytest.raises(SystemExit):
            main([])
