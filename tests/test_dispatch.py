"""Test dispatch order and method activation directly."""

import pytest

import oops
import oopstest


def test_call_selectors():
    assert oops.is_call_selector("call")
    assert oops.is_call_selector("call:")
    assert oops.is_call_selector("call: with:")
    assert oops.is_call_selector("call a: b:")
    assert not oops.is_call_selector("caller")
    assert not oops.is_call_selector("recall")


def test_instance_method_beats_universal_primitive(interp):
    code = """
    [Class subclass name: #Loud];
    [Loud def: #printString do: { "LOUD" }];
    [Loud def: #isNil do: { true }];
    let l = [Loud new];
    [[l printString], [l isNil], [3 printString]]
    """
    assert oopstest.run_value(code, interp) == ["LOUD", True, "3"]


def test_method_on_object_reaches_every_instance(interp):
    code = """
    [Class subclass name: #A];
    [A subclass name: #B];
    [Object def: #tag do: { #tagged }];
    [[B new] tag]
    """
    assert oopstest.run_value(code, interp) == "tagged"


def test_primitive_receivers_ignore_object_methods(interp):
    code = """
    [Object def: #tag do: { #tagged }];
    [3 tag]
    """
    oopstest.run_error(code, oops.DoesNotUnderstand, interp=interp)


def test_send_arity_mismatch_from_python(interp):
    oopstest.run(oopstest.USER_CLASS, interp)
    user = oops.Value(interp.classes.instantiate("User"))
    method = interp.classes.lookup("User", "set id:")

    gen = interp.dispatcher.invoke(method, user, [])
    with pytest.raises(oops.ArityMismatch):
        next(gen)


def test_activation_dies_after_invoke(interp):
    code = oopstest.USER_CLASS + """
    [User def: #leak do: { { 1 } }];
    [[User new] leak]
    """
    block = oopstest.run(code, interp)
    assert block.is_block
    assert block.data.home.method.selector == "leak"
    assert block.data.home.alive is False


def test_write_defaults_to_stdout(capsys):
    dispatcher = oops.Dispatcher(oops.ClassTable(), oops.Environment())
    dispatcher.write("hello")
    assert capsys.readouterr().out == "hello\n"


def test_define_rejects_non_block(interp):
    oopstest.run_error("[Object def: #x do: 3]", oops.PrimitiveFailed, interp=interp)


def test_send_logs_at_debug(interp, caplog):
    with caplog.at_level("DEBUG", logger="oops.dispatch"):
        oopstest.run("[1 + 2]", interp)
    assert any("#+" in record.getMessage() for record in caplog.records)
