import os
import sys

import pytest

from tarfuzz import fuzzer


def make_script(tmp_path, text, name="extractor"):
    path = tmp_path / name
    path.write_text(text)
    os.chmod(path, 0o755)
    return path


def always_crash(tmp_path):
    return make_script(
        tmp_path, "#!/bin/sh\necho '*** The program has crashed ***'\n", "crash"
    )


def never_crash(tmp_path):
    return make_script(tmp_path, "#!/bin/sh\necho ok\n", "fine")


def test_payload_count_and_categories():
    payloads = list(fuzzer.field_payloads(8))
    assert len(payloads) == 18
    categories = [c for c, _ in payloads]
    assert categories.count(fuzzer.TestCategory.NON_EXPECTED) == 9
    assert all(len(p) <= 8 for _, p in payloads)


def test_payload_values():
    payloads = dict(list(fuzzer.field_payloads(100))[:9])
    assert payloads[fuzzer.TestCategory.EMPTY] == b"\0"
    assert payloads[fuzzer.TestCategory.INT_MIN] == b"-2147483648\0"
    assert payloads[fuzzer.TestCategory.STRING] == b"computer-sec\0"
    assert payloads[fuzzer.TestCategory.NON_OCTAL] == b"8" * 99 + b"\0"
    assert payloads[fuzzer.TestCategory.NULL_BYTE] == bytes(100)
    assert payloads[fuzzer.TestCategory.NO_NULL_BYTE] == b"0" * 100


def test_payloads_fit_single_byte_field():
    assert all(len(p) <= 1 for _, p in fuzzer.field_payloads(1))


def test_payloads_reject_empty_field():
    with pytest.raises(ValueError):
        list(fuzzer.field_payloads(0))


def test_results_record_and_report():
    results = fuzzer.FuzzResults()
    assert results.record(fuzzer.TestCategory.EMPTY) == 0
    assert results.record(fuzzer.TestCategory.EMPTY) == 1
    assert results.total == 2
    report = results.report()
    assert report.startswith("\nResults for each Test\n")
    assert "Empty:2\n" in report
    assert report.endswith("Non-Expected:0\n")


def test_fuzz_field_always_crashing(tmp_path):
    fz = fuzzer.Fuzzer(always_crash(tmp_path), tmp_path)
    saved = fz.fuzz_field("magic")
    assert [p.name for p in saved] == [f"success_{i}.tar" for i in range(18)]
    assert all(p.exists() for p in saved)
    assert not (tmp_path / "archive.tar").exists()
    assert saved[0].read_bytes()[257] == 0
    assert fz.results.total == 18


def test_fuzz_field_never_crashing(tmp_path):
    fz = fuzzer.Fuzzer(never_crash(tmp_path), tmp_path)
    assert fz.fuzz_field("uid") == []
    assert fz.results.total == 0
    assert not list(tmp_path.glob("*.tar"))


def test_fuzz_field_selective_crash(tmp_path):
    script = make_script(
        tmp_path,
        f"#!{sys.executable}\n"
        "import sys\n"
        "data = open(sys.argv[1], 'rb').read()\n"
        "if data[0] == 0:\n"
        "    print('*** The program has crashed ***')\n",
    )
    fz = fuzzer.Fuzzer(script, tmp_path)
    saved = fz.fuzz_field("name")
    assert len(saved) == 2
    assert fz.results.counts[fuzzer.TestCategory.EMPTY] == 1
    assert fz.results.counts[fuzzer.TestCategory.NULL_BYTE] == 1


def test_fuzz_unknown_field(tmp_path):
    fz = fuzzer.Fuzzer(never_crash(tmp_path), tmp_path)
    with pytest.raises(ValueError):
        fz.fuzz_field("bogus")


def test_run_removes_leftover(tmp_path):
    (tmp_path / "delete.tar").write_bytes(b"x")
    fz = fuzzer.Fuzzer(never_crash(tmp_path), tmp_path)
    results = fz.run()
    assert results.total == 0
    assert sum(results.counts.values()) == 0
    assert not (tmp_path / "delete.tar").exists()


def test_main_prints_summary(tmp_path, capsys):
    code = fuzzer.main([str(never_crash(tmp_path)), "--workdir", str(tmp_path)])
    out = capsys.readouterr().out
    assert code == 0
    assert "Results for each Test" in out
    assert out.endswith("Successful Tars Created:0\n")


def test_main_missing_extractor(tmp_path):
    code = fuzzer.main([str(tmp_path / "missing"), "--workdir", str(tmp_path)])
    assert code == 1