"""Tests for picture_kit.core.env: .env loading and Settings."""

import os
from pathlib import Path

import pytest
from picture_kit.core.env import IMAGES_DIR_VAR, Settings, _find_dotenv, _parse_dotenv, load_env


class TestParseDotenv:
    def test_key_value(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('PICTURE_IMAGES_DIR=pictures\n')
        assert _parse_dotenv(f) == {'PICTURE_IMAGES_DIR': 'pictures'}

    def test_quotes_stripped(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('A="two words"\nB=\'single\'\n')
        assert _parse_dotenv(f) == {'A': 'two words', 'B': 'single'}

    def test_comments_blanks_and_junk_skipped(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('# images\n\nJUNK\nA=1\n=nokey\n')
        assert _parse_dotenv(f) == {'A': '1'}

    def test_export_prefix(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('export PICTURE_IMAGES_DIR=pictures\n')
        assert _parse_dotenv(f) == {'PICTURE_IMAGES_DIR': 'pictures'}

    def test_only_matching_quotes_stripped(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('A="it\'s"\nB="open\nC=""\n')
        assert _parse_dotenv(f) == {'A': "it's", 'B': '"open', 'C': ''}


class TestFindDotenv:
    def test_in_start_dir(self, tmp_path: Path) -> None:
        dotenv = tmp_path / '.env'
        dotenv.write_text('X=1\n')
        assert _find_dotenv(tmp_path) == dotenv

    def test_in_parent(self, tmp_path: Path) -> None:
        dotenv = tmp_path / '.env'
        dotenv.write_text('X=1\n')
        sub = tmp_path / 'a' / 'b'
        sub.mkdir(parents=True)
        assert _find_dotenv(sub) == dotenv

    def test_stops_at_git_boundary(self, tmp_path: Path) -> None:
        (tmp_path / '.env').write_text('X=1\n')
        repo = tmp_path / 'repo'
        (repo / '.git').mkdir(parents=True)
        src = repo / 'src'
        src.mkdir()
        assert _find_dotenv(src) is None

    def test_git_file_is_a_boundary(self, tmp_path: Path) -> None:
        (tmp_path / '.env').write_text('X=1\n')
        repo = tmp_path / 'worktree'
        repo.mkdir()
        (repo / '.git').write_text('gitdir: ../elsewhere\n')
        assert _find_dotenv(repo) is None

    def test_dotenv_beside_git_is_found(self, tmp_path: Path) -> None:
        (tmp_path / '.git').mkdir()
        dotenv = tmp_path / '.env'
        dotenv.write_text('X=1\n')
        sub = tmp_path / 'src'
        sub.mkdir()
        assert _find_dotenv(sub) == dotenv


class TestLoadEnv:
    def test_sets_missing(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('PICTURE_TEST_KEY', '')
        monkeypatch.delenv('PICTURE_TEST_KEY')
        (tmp_path / '.env').write_text('PICTURE_TEST_KEY=value\n')
        monkeypatch.chdir(tmp_path)
        assert load_env() == tmp_path / '.env'
        assert os.environ['PICTURE_TEST_KEY'] == 'value'

    def test_existing_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('PICTURE_TEST_KEY2', 'os')
        (tmp_path / '.env').write_text('PICTURE_TEST_KEY2=file\n')
        monkeypatch.chdir(tmp_path)
        load_env()
        assert os.environ['PICTURE_TEST_KEY2'] == 'os'

    def test_explicit_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('PICTURE_TEST_KEY3', '')
        monkeypatch.delenv('PICTURE_TEST_KEY3')
        custom = tmp_path / 'custom.env'
        custom.write_text('PICTURE_TEST_KEY3=custom\n')
        assert load_env(env_file=str(custom)) == custom
        assert os.environ['PICTURE_TEST_KEY3'] == 'custom'

    def test_explicit_file_missing(self, tmp_path: Path) -> None:
        assert load_env(env_file=str(tmp_path / 'missing.env')) is None

    def test_none_found(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / '.git').mkdir()
        monkeypatch.chdir(tmp_path)
        assert load_env() is None


class TestSettings:
    def test_default_images_dir(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(IMAGES_DIR_VAR, raising=False)
        assert Settings.from_env().images_dir == Path('images')

    def test_images_dir_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(IMAGES_DIR_VAR, '/srv/pictures')
        assert Settings.from_env().images_dir == Path('/srv/pictures')
