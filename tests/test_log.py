from core.log import LogManager


def test_debug_respects_verbosity_and_names_caller():
    log = LogManager(verbosity=1)
    start = log.count()
    log.debug("shown", 1)
    log.debug("hidden", 2)
    assert log.count() == start + 1
    assert log.get(-1)[1] == "[test_log.py] shown"


def test_write_to_file(tmp_path):
    log = LogManager()
    log.add("hello")
    path = tmp_path / "basketpad.log"
    assert log.write_to_file(str(path))
    assert "hello" in path.read_text(encoding="utf-8")
    assert not log.write_to_file(str(tmp_path / "missing" / "x.log"))
