"""Tests for compose_checker.core.env: .env loading and sampling configuration."""

import os
from pathlib import Path

import pytest
from compose_checker.core.env import (
    DEFAULT_MAKEPNG,
    find_dotenv,
    load_env,
    makepng_path,
    parse_int,
    read_dotenv,
    sampling_from_env,
)
from compose_checker.core.types import Sampling


class TestReadDotenv:
    def test_simple_key_value(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('COMPOSE_CLOSURE_STRIDE=5\n')
        assert read_dotenv(f) == {'COMPOSE_CLOSURE_STRIDE': '5'}

    def test_quoted_values(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('MAKEPNG="/opt/png tools/makepng"\nOTHER=\'x\'\n')
        assert read_dotenv(f) == {'MAKEPNG': '/opt/png tools/makepng', 'OTHER': 'x'}

    def test_comments_and_blanks_ignored(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('# strides\n\nFOO=bar\nNOEQUALS\n')
        assert read_dotenv(f) == {'FOO': 'bar'}


class TestFindDotenv:
    def test_finds_in_parent(self, tmp_path: Path) -> None:
        sub = tmp_path / 'a' / 'b'
        sub.mkdir(parents=True)
        dotenv = tmp_path / '.env'
        dotenv.write_text('X=1\n')
        (tmp_path / '.git').mkdir()
        assert find_dotenv(sub) == dotenv

    def test_stops_at_git_dir(self, tmp_path: Path) -> None:
        repo = tmp_path / 'repo'
        (repo / '.git').mkdir(parents=True)
        (repo / 'src').mkdir()
        (tmp_path / '.env').write_text('X=1\n')
        assert find_dotenv(repo / 'src') is None

    def test_stops_at_git_file(self, tmp_path: Path) -> None:
        repo = tmp_path / 'repo'
        repo.mkdir()
        (repo / '.git').write_text('gitdir: ../elsewhere\n')
        (tmp_path / '.env').write_text('X=1\n')
        assert find_dotenv(repo) is None

    def test_env_beside_git_is_found(self, tmp_path: Path) -> None:
        (tmp_path / '.git').mkdir()
        dotenv = tmp_path / '.env'
        dotenv.write_text('X=1\n')
        assert find_dotenv(tmp_path) == dotenv


class TestLoadEnv:
    def test_sets_missing_vars(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('COMPOSE_TEST_KEY', '')
        monkeypatch.delenv('COMPOSE_TEST_KEY')
        (tmp_path / '.git').mkdir()
        (tmp_path / '.env').write_text('COMPOSE_TEST_KEY=fromfile\n')
        monkeypatch.chdir(tmp_path)
        assert load_env() == tmp_path / '.env'
        assert os.environ.get('COMPOSE_TEST_KEY') == 'fromfile'

    def test_does_not_overwrite_existing(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('COMPOSE_TEST_KEY2', 'original')
        (tmp_path / '.git').mkdir()
        (tmp_path / '.env').write_text('COMPOSE_TEST_KEY2=fromfile\n')
        monkeypatch.chdir(tmp_path)
        load_env()
        assert os.environ.get('COMPOSE_TEST_KEY2') == 'original'

    def test_explicit_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('COMPOSE_TEST_KEY3', '')
        monkeypatch.delenv('COMPOSE_TEST_KEY3')
        custom = tmp_path / 'custom.env'
        custom.write_text('COMPOSE_TEST_KEY3=custom\n')
        assert load_env(env_file=str(custom)) == custom
        assert os.environ.get('COMPOSE_TEST_KEY3') == 'custom'

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        assert load_env(env_file=str(tmp_path / 'nope.env')) is None

    def test_returns_none_when_no_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / '.git').mkdir()
        monkeypatch.chdir(tmp_path)
        assert load_env() is None


class TestSamplingFromEnv:
    def test_defaults(self) -> None:
        assert sampling_from_env({}) == Sampling()

    def test_strides_read(self) -> None:
        s = sampling_from_env({'COMPOSE_CLOSURE_STRIDE': '5', 'COMPOSE_MONOTONIC_FG_STRIDE': '1'})
        assert s.closure_bg_stride == 5
        assert s.monotonic_fg_stride == 1
        assert s.identity_stride == 51

    def test_blank_value_means_default(self) -> None:
        assert sampling_from_env({'COMPOSE_MAX_REPORTED': '  '}).max_reported == 10

    @pytest.mark.parametrize('flag', ['1', 'true', 'YES', 'on'])
    def test_exhaustive(self, flag: str) -> None:
        s = sampling_from_env({'COMPOSE_EXHAUSTIVE': flag})
        assert s == Sampling.exhaustive()

    def test_exhaustive_with_explicit_stride(self) -> None:
        s = sampling_from_env({'COMPOSE_EXHAUSTIVE': '1', 'COMPOSE_CLOSURE_STRIDE': '17'})
        assert s.closure_bg_stride == 17
        assert s.identity_stride == 1

    def test_exhaustive_off(self) -> None:
        assert sampling_from_env({'COMPOSE_EXHAUSTIVE': '0'}) == Sampling()

    def test_not_an_integer(self) -> None:
        with pytest.raises(ValueError, match='COMPOSE_IDENTITY_STRIDE'):
            sampling_from_env({'COMPOSE_IDENTITY_STRIDE': 'wide'})

    def test_out_of_range(self) -> None:
        with pytest.raises(ValueError, match='closure_bg_stride'):
            sampling_from_env({'COMPOSE_CLOSURE_STRIDE': '0'})


class TestMakepngPath:
    def test_default(self) -> None:
        assert makepng_path({}) == DEFAULT_MAKEPNG

    def test_from_env(self) -> None:
        assert makepng_path({'MAKEPNG': '/usr/local/bin/makepng'}) == '/usr/local/bin/makepng'


class TestParseInt:
    def test_missing_or_blank_is_none(self) -> None:
        assert parse_int('--closure-stride', None) is None
        assert parse_int('--closure-stride', '  ') is None

    def test_value(self) -> None:
        assert parse_int('--closure-stride', ' 5 ') == 5

    def test_error_names_the_setting(self) -> None:
        with pytest.raises(ValueError, match="--closure-stride must be an integer, got 'x'"):
            parse_int('--closure-stride', 'x')
