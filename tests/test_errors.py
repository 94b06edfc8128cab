import os

import pytest

from suplog.bugsnag.errors import (
    PanicParseError,
    StackFrame,
    TracedError,
    UncaughtPanic,
    errorf,
    new_error,
    parse_panic,
)

CREATED_BY = """panic: hello!

goroutine 54 [running]:
runtime.panic(0x35ce40, 0xc208039db0)
\t/0/c/go/src/pkg/runtime/panic.c:279 +0xf5
github.com/loopj/bugsnag-example-apps/go/revelapp/app/controllers.func·001()
\t/0/go/src/github.com/loopj/bugsnag-example-apps/go/revelapp/app/controllers/app.go:13 +0x74
net/http.(*Server).Serve(0xc20806c780, 0x910c88, 0xc20803e168, 0x0, 0x0)
\t/0/c/go/src/pkg/net/http/server.go:1698 +0x91
created by github.com/loopj/bugsnag-example-apps/go/revelapp/app/controllers.App.Index
\t/0/go/src/github.com/loopj/bugsnag-example-apps/go/revelapp/app/controllers/app.go:14 +0x3e

goroutine 16 [IO wait]:
net.runtime_pollWait(0x911c30, 0x72, 0x0)
\t/0/c/go/src/pkg/runtime/netpoll.goc:146 +0x66
main.main()
\t/0/go/src/github.com/loopj/bugsnag-example-apps/go/revelapp/app/tmp/main.go:109 +0xe1a
"""

NORMAL_SPLIT = """panic: hello!

goroutine 54 [running]:
runtime.panic(0x35ce40, 0xc208039db0)
\t/0/c/go/src/pkg/runtime/panic.c:279 +0xf5
github.com/loopj/bugsnag-example-apps/go/revelapp/app/controllers.func·001()
\t/0/go/src/github.com/loopj/bugsnag-example-apps/go/revelapp/app/controllers/app.go:13 +0x74
net/http.(*Server).Serve(0xc20806c780, 0x910c88, 0xc20803e168, 0x0, 0x0)
\t/0/c/go/src/pkg/net/http/server.go:1698 +0x91

goroutine 16 [IO wait]:
net.runtime_pollWait(0x911c30, 0x72, 0x0)
\t/0/c/go/src/pkg/runtime/netpoll.goc:146 +0x66
net.(*pollDesc).Wait(0xc2080ba990, 0x72, 0x0, 0x0)
\t/0/c/go/src/pkg/net/fd_poll_runtime.go:84 +0x46
github.com/revel/revel.Run(0xe6d9)
\t/0/go/src/github.com/revel/revel/server.go:113 +0x926
main.main()
\t/0/go/src/github.com/loopj/bugsnag-example-apps/go/revelapp/app/tmp/main.go:109 +0xe1a
"""

LAST_GOROUTINE = """panic: hello!

goroutine 16 [IO wait]:
net.runtime_pollWait(0x911c30, 0x72, 0x0)
\t/0/c/go/src/pkg/runtime/netpoll.goc:146 +0x66
net.(*pollDesc).Wait(0xc2080ba990, 0x72, 0x0, 0x0)
\t/0/c/go/src/pkg/net/fd_poll_runtime.go:84 +0x46
github.com/revel/revel.Run(0xe6d9)
\t/0/go/src/github.com/revel/revel/server.go:113 +0x926
main.main()
\t/0/go/src/github.com/loopj/bugsnag-example-apps/go/revelapp/app/tmp/main.go:109 +0xe1a

goroutine 54 [running]:
runtime.panic(0x35ce40, 0xc208039db0)
\t/0/c/go/src/pkg/runtime/panic.c:279 +0xf5
github.com/loopj/bugsnag-example-apps/go/revelapp/app/controllers.func·001()
\t/0/go/src/github.com/loopj/bugsnag-example-apps/go/revelapp/app/controllers/app.go:13 +0x74
net/http.(*Server).Serve(0xc20806c780, 0x910c88, 0xc20803e168, 0x0, 0x0)
\t/0/c/go/src/pkg/net/http/server.go:1698 +0x91
"""

CONTROLLERS = "github.com/loopj/bugsnag-example-apps/go/revelapp/app/controllers"
APP_GO = "/0/go/src/github.com/loopj/bugsnag-example-apps/go/revelapp/app/controllers/app.go"

RESULT = [
    StackFrame(file="/0/c/go/src/pkg/runtime/panic.c", line_number=279, name="panic", package="runtime"),
    StackFrame(file=APP_GO, line_number=13, name="func.001", package=CONTROLLERS),
    StackFrame(file="/0/c/go/src/pkg/net/http/server.go", line_number=1698, name="(*Server).Serve", package="net/http"),
]

RESULT_CREATED_BY = RESULT + [
    StackFrame(file=APP_GO, line_number=14, name="App.Index", package=CONTROLLERS, program_counter=0),
]


@pytest.mark.parametrize(
    "text, expected",
    [
        (CREATED_BY, RESULT_CREATED_BY),
        (NORMAL_SPLIT, RESULT),
        (LAST_GOROUTINE, RESULT),
    ],
)
def test_parse_panic(text, expected):
    err = parse_panic(text)
    assert err.type_name() == "panic"
    assert str(err) == "hello!"
    assert isinstance(err.err, UncaughtPanic)
    assert err.stack_frames()[0].program_counter == 0
    assert err.stack_frames() == expected


def test_parse_panic_requires_prefix():
    with pytest.raises(PanicParseError, match="no prefix"):
        parse_panic("hello\n")


def test_parse_panic_without_running_goroutine():
    with pytest.raises(PanicParseError, match="could not parse panic"):
        parse_panic("panic: hello!\n\ngoroutine 16 [IO wait]:\n")


def test_parse_panic_unpaired_line():
    with pytest.raises(PanicParseError, match="unpaired"):
        parse_panic("panic: x\ngoroutine 1 [running]:\nmain.main()")


def test_parse_panic_bad_line_number():
    text = "panic: x\ngoroutine 1 [running]:\nmain.main()\n\t/a/main.go:abc +0x1\n"
    with pytest.raises(PanicParseError, match="bad line number"):
        parse_panic(text)


def test_parse_panic_missing_tab():
    text = "panic: x\ngoroutine 1 [running]:\nmain.main()\n/a/main.go:3 +0x1\n"
    with pytest.raises(PanicParseError, match="no tab"):
        parse_panic(text)


def test_parse_panic_missing_call():
    text = "panic: x\ngoroutine 1 [running]:\nmain.main\n\t/a/main.go:3 +0x1\n"
    with pytest.raises(PanicParseError, match="no call"):
        parse_panic(text)


def _make_error():
    return new_error("hi", 1)


def test_new_error_from_string():
    e = _make_error()
    assert str(e) == "hi"


def test_skip_starts_at_callers_caller():
    e = _make_error()
    assert e.stack_frames()[0].name == "test_skip_starts_at_callers_caller"


def test_new_error_from_exception():
    assert str(new_error(ValueError("yo"), 0)) == "yo"


def test_new_error_returns_same_traced_error():
    e = _make_error()
    assert new_error(e, 0) is e


def test_new_error_from_none():
    assert str(new_error(None, 0)) == "<nil>"


class _FramesCarrier:
    def __init__(self, err):
        self.err = err

    def stack_frames(self):
        return self.err.stack_frames()

    def __str__(self):
        return str(self.err)


def test_new_error_with_stack_frames():
    err = new_error("foo", 0)
    carrier = _FramesCarrier(err)
    wrapped = new_error(carrier, 0)
    assert wrapped.err is carrier
    assert wrapped.stack() == err.stack()
    assert str(wrapped) == "foo"


def test_errorf_message():
    e = errorf("can only halve even numbers, got %d", 1)
    assert str(e) == "can only halve even numbers, got 1"


def test_errorf_stack_starts_at_caller():
    e = errorf("hi")
    top = e.stack_frames()[0]
    assert top.name == "test_errorf_stack_starts_at_caller"
    assert os.path.basename(top.file) == os.path.basename(__file__)
    assert top.package == "test_errors"


def test_stack_text_includes_source_line():
    e = errorf("hi")
    lines = e.stack().split("\n")
    assert lines[1] == '\ttest_stack_text_includes_source_line: e = errorf("hi")'


def test_stack_depth_is_limited():
    def recurse(n):
        if n == 0:
            return new_error("deep", 0)
        return recurse(n - 1)

    assert len(recurse(80).stack_frames()) == 50


def test_type_name():
    assert new_error(ValueError("x"), 0).type_name() == "ValueError"
    assert new_error(UncaughtPanic("boom"), 0).type_name() == "panic"


def test_traced_error_is_raisable():
    err = errorf("boom")
    assert str(err) == "boom"
    assert err.stack_frames()[0].name == "test_traced_error_is_raisable"
    with pytest.raises(TracedError) as info:
        raise err
    assert info.value is err


def test_source_line(tmp_path):
    path = tmp_path / "src.txt"
    path.write_text("first\n\t  second line  \nthird\n")
    frame = StackFrame(file=str(path), line_number=2, name="f")
    assert frame.source_line() == "second line"
    assert str(frame) == f"{path}:2 (0x0)\n\tf: second line\n"


def test_source_line_out_of_range(tmp_path):
    path = tmp_path / "src.txt"
    path.write_text("first\n")
    assert StackFrame(file=str(path), line_number=5).source_line() == "???"
    assert StackFrame(file=str(path), line_number=0).source_line() == "???"


def test_source_line_missing_file(tmp_path):
    frame = StackFrame(file=str(tmp_path / "missing.txt"), line_number=1)
    with pytest.raises(OSError):
        frame.source_line()
    assert str(frame) == f"{tmp_path / 'missing.txt'}:1 (0x0)\n"