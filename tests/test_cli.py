"""End-to-end tests: run mix-tool's main() against inline recipes and fixture files."""

import json
import os
from pathlib import Path

import pytest
from mix_checker.__main__ import main
from mix_checker.registry import all_commands, get
from PIL import Image

FIXTURES_DIR = Path(__file__).parent / 'fixtures'
RECIPES_MIX = str(FIXTURES_DIR / 'recipes.mix')
REFERENCE_JSON = str(FIXTURES_DIR / 'reference.json')


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run from an empty repo root so no stray .env is picked up."""
    (tmp_path / '.git').mkdir()
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv('MIX_TOOL_FAIL_BELOW', raising=False)
    monkeypatch.delenv('MIX_TOOL_OUT_DIR', raising=False)
    return tmp_path


def _run_json(capsys: pytest.CaptureFixture[str], argv: list[str]) -> dict:
    main([*argv, '--json'])
    return json.loads(capsys.readouterr().out)


class TestRegistry:
    def test_discovers_commands(self) -> None:
        assert set(all_commands()) == {'compare', 'equal', 'mix', 'swatch'}

    def test_unknown_command(self) -> None:
        with pytest.raises(KeyError, match='Unknown command'):
            get('blend')

    def test_target_required_flags(self) -> None:
        assert get('compare').needs_target
        assert get('equal').needs_target
        assert not get('mix').needs_target


class TestMix:
    def test_inline(self, capsys: pytest.CaptureFixture[str]) -> None:
        obj = _run_json(capsys, ['mix', '#ff0000@50, #0000ff@50'])
        mixed = obj['recipes'][0]['mixed']
        assert mixed['rgb'] == [127.5, 0, 127.5]
        assert mixed['hex'] == '#800080'
        assert mixed['nearest'] == 'purple'

    def test_file(self, capsys: pytest.CaptureFixture[str]) -> None:
        obj = _run_json(capsys, ['mix', RECIPES_MIX])
        assert [r['name'] for r in obj['recipes']] == ['purple', 'olive drab', 'pink-ish']

    def test_text_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(['mix', 'red@100'])
        out = capsys.readouterr().out
        assert '── default' in out
        assert '#ff0000' in out

    def test_bad_proportions_exit_2(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc:
            main(['mix', 'red@60, blue@30'])
        assert exc.value.code == 2
        assert 'mix-tool: error: Color proportions must sum up to 100%' in capsys.readouterr().err

    def test_parse_error_exit_2(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc:
            main(['mix', 'mauve@100'])
        assert exc.value.code == 2
        assert 'unknown colour' in capsys.readouterr().err


class TestCompare:
    def test_requires_target(self) -> None:
        with pytest.raises(SystemExit) as exc:
            main(['compare', 'red@100'])
        assert exc.value.code == 2

    def test_exact(self, capsys: pytest.CaptureFixture[str]) -> None:
        obj = _run_json(capsys, ['compare', 'red@100', '--target', '#ff0000@100'])
        result = obj['recipes'][0]
        assert result['score'] == 100
        assert result['exact_match'] is True

    def test_red_vs_green(self, capsys: pytest.CaptureFixture[str]) -> None:
        obj = _run_json(capsys, ['compare', 'red@100', '--target', 'lime@100'])
        result = obj['recipes'][0]
        assert result['score'] == 32
        assert result['matches'] == [{'entry': 0, 'target_entry': 0, 'score': 53.33}]

    def test_files_paired_by_name(self, capsys: pytest.CaptureFixture[str]) -> None:
        obj = _run_json(capsys, ['compare', RECIPES_MIX, '--target', REFERENCE_JSON])
        by_name = {r['name']: r for r in obj['recipes']}
        assert by_name['purple']['score'] == 100
        assert by_name['olive drab']['score'] < 100
        assert 'no target recipe' in by_name['pink-ish']['error']

    def test_fail_below_exits_1(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc:
            main(['compare', 'red@100', '--target', 'lime@100', '--fail-below', '80'])
        assert exc.value.code == 1
        captured = capsys.readouterr()
        assert 'FAIL 1/1 recipes' in captured.out
        assert 'scored below 80' in captured.err

    def test_fail_below_passes(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(['compare', 'red@100', '--target', 'red@100', '--fail-below', '80'])
        assert 'PASS 1/1 recipes' in capsys.readouterr().out

    def test_unpaired_recipe_fails_gate(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc:
            main(['compare', 'a: red@100', '--target', 'b: red@100\nc: lime@100', '--fail-below', '80'])
        assert exc.value.code == 1
        captured = capsys.readouterr()
        assert "error: no target recipe named 'a'" in captured.out
        assert 'FAIL 1/1 recipes' in captured.out
        assert 'had no target' in captured.err

    def test_unpaired_recipe_in_json_report(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit):
            main(['compare', RECIPES_MIX, '--target', REFERENCE_JSON, '--fail-below', '0', '--json'])
        obj = json.loads(capsys.readouterr().out)
        by_name = {r['name']: r for r in obj['recipes']}
        assert by_name['pink-ish']['pass'] is False
        assert by_name['purple']['pass'] is True
        assert obj['summary'] == {'total': 3, 'pass': 2, 'fail': 1}

    def test_fail_below_from_dotenv(self, isolated_cwd: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (isolated_cwd / '.env').write_text('MIX_TOOL_FAIL_BELOW=90\n')
        try:
            with pytest.raises(SystemExit) as exc:
                main(['compare', 'red@100', '--target', 'lime@100'])
        finally:
            os.environ.pop('MIX_TOOL_FAIL_BELOW', None)
        assert exc.value.code == 1
        assert 'mix-tool: loaded' in capsys.readouterr().err

    def test_invalid_target_sum_exit_2(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc:
            main(['compare', 'red@100', '--target', 'red@50'])
        assert exc.value.code == 2


class TestEqual:
    def test_same_blend_different_recipe(self, capsys: pytest.CaptureFixture[str]) -> None:
        obj = _run_json(capsys, ['equal', '#ff0000@50, #0000ff@50', '--target', 'rgb(127.5, 0, 127.5)@100'])
        assert obj['recipes'][0]['equal'] is True

    def test_different_blend(self, capsys: pytest.CaptureFixture[str]) -> None:
        obj = _run_json(capsys, ['equal', 'red@100', '--target', 'rgb(254, 0, 0)@100'])
        assert obj['recipes'][0]['equal'] is False


class TestSwatch:
    def test_writes_png(self, isolated_cwd: Path, capsys: pytest.CaptureFixture[str]) -> None:
        out_dir = isolated_cwd / 'out'
        obj = _run_json(capsys, ['swatch', 'mine: red@50, blue@50', '--out-dir', str(out_dir)])
        path = Path(obj['recipes'][0]['swatch'])
        assert path == out_dir / 'mine_swatch.png'

        img = Image.open(path)
        assert img.size == (400, 160)
        assert img.getpixel((10, 10)) == (255, 0, 0)
        assert img.getpixel((390, 10)) == (0, 0, 255)
        assert img.getpixel((200, 120)) == (128, 0, 128)

    def test_target_band(self, isolated_cwd: Path, capsys: pytest.CaptureFixture[str]) -> None:
        obj = _run_json(capsys, ['swatch', 'red@100', '--target', 'lime@100', '--out-dir', str(isolated_cwd)])
        img = Image.open(obj['recipes'][0]['swatch'])
        assert img.size == (400, 240)
        assert img.getpixel((10, 200)) == (0, 255, 0)

    def test_out_dir_is_a_file_exit_2(self, isolated_cwd: Path, capsys: pytest.CaptureFixture[str]) -> None:
        blocker = isolated_cwd / 'not_a_dir'
        blocker.write_text('')
        with pytest.raises(SystemExit) as exc:
            main(['swatch', 'red@100', '--out-dir', str(blocker)])
        assert exc.value.code == 2
        assert 'mix-tool: error:' in capsys.readouterr().err

    def test_out_dir_from_env(
        self, isolated_cwd: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv('MIX_TOOL_OUT_DIR', str(isolated_cwd / 'env_out'))
        main(['swatch', 'white@100'])
        assert (isolated_cwd / 'env_out' / 'default_swatch.png').is_file()


class TestHelp:
    def test_lists_commands(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(['help'])
        out = capsys.readouterr().out
        for name in ('compare', 'equal', 'mix', 'swatch'):
            assert name in out

    def test_command_docs(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(['help', 'compare'])
        assert 'not symmetric' in capsys.readouterr().out

    def test_unknown_topic(self) -> None:
        with pytest.raises(SystemExit) as exc:
            main(['help', 'nope'])
        assert exc.value.code == 1
