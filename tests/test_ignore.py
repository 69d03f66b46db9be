from zit.ignore import is_ignored, iter_tracked_files, load_ignores


def test_load_ignores_skips_comments_and_blanks(tmp_path):
    (tmp_path / ".zitignore").write_text("# comment\n\n*.pyc\n  build/  \n")
    assert load_ignores(str(tmp_path)) == ["*.pyc", "build/"]


def test_load_ignores_without_file(tmp_path):
    assert load_ignores(str(tmp_path)) == []


def test_directory_pattern():
    assert is_ignored("build", ["build/"])
    assert is_ignored("build/lib/x.py", ["build/"])
    assert not is_ignored("builder.py", ["build/"])


def test_glob_pattern():
    assert is_ignored("pkg/mod.pyc", ["*.pyc"])
    assert not is_ignored("pkg/mod.py", ["*.pyc"])


def test_iter_tracked_files_skips_repo_dir_and_ignored(tmp_path):
    (tmp_path / ".zit" / "objects").mkdir(parents=True)
    (tmp_path / ".zit" / "HEAD").write_text("")
    (tmp_path / "b.txt").write_text("b")
    (tmp_path / "a.txt").write_text("a")
    (tmp_path / "cache").mkdir()
    (tmp_path / "cache" / "x").write_text("x")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "c.txt").write_text("c")

    assert list(iter_tracked_files(str(tmp_path), ["cache/"])) == ["a.txt", "b.txt", "sub/c.txt"]


def test_iter_tracked_files_from_subdirectory(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "c.txt").write_text("c")
    (tmp_path / "top.txt").write_text("t")

    assert list(iter_tracked_files(str(tmp_path), [], start=str(tmp_path / "sub"))) == ["sub/c.txt"]


def test_bare_directory_pattern_matches_at_any_depth():
    assert is_ignored("src/build", ["build/"])
    assert is_ignored("src/build/out.txt", ["build/"])
    assert not is_ignored("src/rebuild/out.txt", ["build/"])
    assert not is_ignored("src/build", ["lib/build/"])
