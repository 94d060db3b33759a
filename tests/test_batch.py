import logging

import r_tidy.batch
from r_tidy.batch import find_r_scripts, tidy_dir


def make_tree(root):
    (root / "a.R").write_text("x=1\n")
    (root / "b.r").write_text("y<-2 # two\n")
    (root / "notes.txt").write_text("x=1\n")
    (root / "sub").mkdir()
    (root / "sub" / "c.S").write_text("z<-3\n")


def test_find_r_scripts(tmp_path):
    make_tree(tmp_path)
    assert [path.name for path in find_r_scripts(tmp_path)] == ["a.R", "b.r"]
    assert [path.name for path in find_r_scripts(tmp_path, recursive=True)] == [
        "a.R",
        "b.r",
        "c.S",
    ]


def test_tidy_dir_in_place(tmp_path):
    make_tree(tmp_path)
    results = tidy_dir(tmp_path, jobs=1)
    assert [(result.path.name, result.ok) for result in results] == [
        ("a.R", True),
        ("b.r", True),
    ]
    assert (tmp_path / "a.R").read_text() == "x = 1\n"
    assert (tmp_path / "b.r").read_text() == "y <- 2  # two\n"
    assert (tmp_path / "notes.txt").read_text() == "x=1\n"
    assert (tmp_path / "sub" / "c.S").read_text() == "z<-3\n"


def test_tidy_dir_recursive_with_options(tmp_path):
    make_tree(tmp_path)
    results = tidy_dir(tmp_path, recursive=True, jobs=1, arrow=True)
    assert all(result.ok and result.changed for result in results)
    assert (tmp_path / "a.R").read_text() == "x <- 1\n"
    assert (tmp_path / "sub" / "c.S").read_text() == "z <- 3\n"


def test_tidy_dir_unchanged_file(tmp_path):
    (tmp_path / "done.R").write_text("x <- 1\n")
    (result,) = tidy_dir(tmp_path, jobs=1)
    assert result.ok
    assert not result.changed


def test_tidy_dir_keeps_going_after_a_failure(tmp_path, caplog):
    (tmp_path / "bad.R").write_text("x <- (\n")
    (tmp_path / "good.R").write_text("y<-1\n")
    with caplog.at_level(logging.INFO, logger="r_tidy"):
        results = tidy_dir(tmp_path, jobs=1)
    bad, good = results
    assert not bad.ok
    assert bad.error
    assert good.ok
    assert (tmp_path / "bad.R").read_text() == "x <- (\n"
    assert (tmp_path / "good.R").read_text() == "y <- 1\n"
    assert f"tidying {tmp_path / 'good.R'}" in caplog.text
    assert f"Failed to tidy {tmp_path / 'bad.R'}" in caplog.text


def test_tidy_dir_process_pool(tmp_path):
    for index in range(4):
        (tmp_path / f"f{index}.R").write_text(f"v{index}<-{index}\n")
    results = tidy_dir(tmp_path, jobs=2)
    assert all(result.ok for result in results)
    assert (tmp_path / "f3.R").read_text() == "v3 <- 3\n"


def test_tidy_dir_empty(tmp_path):
    assert tidy_dir(tmp_path) == []


def test_tidy_dir_survives_unexpected_errors(tmp_path, monkeypatch, caplog):
    (tmp_path / "a.R").write_text("x=1\n")
    (tmp_path / "b.R").write_text("y<-2\n")
    tidy_text = r_tidy.batch.tidy_text

    def flaky_tidy_text(lines, options):
        if lines == ["x=1"]:
            raise RecursionError("maximum recursion depth exceeded")
        return tidy_text(lines, options)

    monkeypatch.setattr(r_tidy.batch, "tidy_text", flaky_tidy_text)
    with caplog.at_level(logging.ERROR, logger="r_tidy"):
        first, second = tidy_dir(tmp_path, jobs=1)
    assert not first.ok
    assert first.error.startswith("RecursionError")
    assert (tmp_path / "a.R").read_text() == "x=1\n"
    assert second.ok
    assert (tmp_path / "b.R").read_text() == "y <- 2\n"
    assert f"Failed to tidy {tmp_path / 'a.R'}" in caplog.text
