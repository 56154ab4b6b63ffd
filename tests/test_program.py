"""Test whole programs: classes, instances, dispatch and inheritance."""

import oops
import oopstest


def test_user_end_to_end():
    code = oopstest.USER_CLASS + """
    let u = [User new];
    [u set id: 123];
    [u id]
    """
    assert oopstest.run_value(code) == 123


def test_module_level_evaluate_program():
    program = oops.parse_program(oopstest.USER_CLASS + "[[User new] id]")
    result = oops.evaluate_program(program)
    assert result.is_nil


def test_new_instance_ivars_are_nil():
    code = """
    [Class subclass name: #Point fields: [#x, #y]];
    let p = [Point new];
    [Point def: #x do: { @x }];
    [[p x] isNil]
    """
    assert oopstest.run_value(code) is True


def test_new_with_ivar_keywords():
    code = """
    [Class subclass name: #Point fields: [#x, #y]];
    [Point def: #sum do: { [@x + @y] }];
    [[Point new x: 3 y: 4] sum]
    """
    assert oopstest.run_value(code) == 7


def test_inherited_method():
    code = """
    [Class subclass name: #Animal fields: [#name]];
    [Animal subclass name: #Dog];
    [Dog subclass name: #Puppy ivars: [#age]];
    [Animal def: #name: do: |n:| { @name = n; self }];
    [Animal def: #describe do: { ["I am " + @name] }];
    [[[Puppy new] name: "Rex"] describe]
    """
    assert oopstest.run_value(code) == "I am Rex"


def test_override_and_super():
    code = """
    [Class subclass name: #Animal];
    [Animal subclass name: #Dog];
    [Dog subclass name: #Puppy];
    [Animal def: #speak do: { "..." }];
    [Dog def: #speak do: { ["Woof " + [super speak]] }];
    [Puppy def: #speak do: { ["Yip " + [super speak]] }];
    [[Puppy new] speak]
    """
    assert oopstest.run_value(code) == "Yip Woof ..."


def test_redefinition_reaches_existing_instances():
    code = """
    [Class subclass name: #Greeter];
    [Greeter def: #hello do: { "hi" }];
    let g = [Greeter new];
    let before = [g hello];
    [Greeter def: #hello do: { "hello" }];
    [before, [g hello]]
    """
    assert oopstest.run_value(code) == ["hi", "hello"]


def test_keyword_selector_definition():
    code = """
    [Class subclass name: #Calc];
    [Calc def: #add:to: do: |a: b:| { [a + b] }];
    [Calc def: "scale by:" do: |n:| { [n * 10] }];
    let c = [Calc new];
    [[c add: 1 to: 2], [c scale by: 4]]
    """
    assert oopstest.run_value(code) == [3, 40]


def test_binary_operator_method():
    code = """
    [Class subclass name: #Money fields: [#cents]];
    [Money def: #cents do: { @cents }];
    [Money def: #+ do: |other:| { [Money new cents: [@cents + [other cents]]] }];
    [[[Money new cents: 150] + [Money new cents: 75]] cents]
    """
    assert oopstest.run_value(code) == 225


def test_arguments_evaluated_left_to_right():
    code = """
    let log = [];
    [Class subclass name: #Recorder];
    [Recorder def: #foo:bar: do: |a: b:| { [log add: #method]; [a size] }];
    [[Recorder new] foo: [log add: #first] bar: [log add: #second]];
    log
    """
    assert oopstest.run_value(code) == ["first", "second", "method"]


def test_method_scope_is_global_not_caller():
    code = """
    let shared = "global";
    [Class subclass name: #Probe];
    [Probe def: #look do: { shared }];
    [Probe def: #peek do: { local }];
    let local = "caller";
    [[Probe new] look]
    """
    assert oopstest.run_value(code) == "global"


def test_block_resolves_against_defining_method():
    code = """
    [Class subclass name: #Maker];
    [Class subclass name: #Runner];
    [Maker def: #make do: { let secret = 42; { secret } }];
    [Runner def: #run: do: |block:| { let secret = 0; [block call] }];
    [[Runner new] run: [[Maker new] make]]
    """
    assert oopstest.run_value(code) == 42


def test_block_keeps_self_and_ivars():
    code = """
    [Class subclass name: #Counter fields: [#count]];
    [Counter def: #init do: { @count = 0; self }];
    [Counter def: #incrementer do: { { @count = [@count + 1] } }];
    [Counter def: #count do: { @count }];
    let c = [[Counter new] init];
    let inc = [c incrementer];
    [inc call]; [inc call]; [inc call];
    [c count]
    """
    assert oopstest.run_value(code) == 3


def test_reflection():
    code = oopstest.USER_CLASS + """
    [User subclass name: #Admin fields: [#level]];
    [Admin def: #level do: { @level }];
    [[Admin name], [[Admin superclass] name], [Admin ivars], [Admin selectors],
     [[Admin new] className], [[[Admin new] class] name]]
    """
    assert oopstest.run_value(code) == [
        "Admin", "User", ["id", "level"], ["id", "level", "set id:"],
        "Admin", "Admin",
    ]


def test_responds_to():
    code = oopstest.USER_CLASS + """
    let u = [User new];
    [[u respondsTo: "set id:"], [u respondsTo: #id], [u respondsTo: #print],
     [u respondsTo: #fly], [User respondsTo: #new], [3 respondsTo: #+]]
    """
    assert oopstest.run_value(code) == [True, True, True, False, True, True]


def test_class_is_object_alias():
    code = """
    [Class subclass name: #Thing];
    [[Thing superclass] name]
    """
    assert oopstest.run_value(code) == "Object"


def test_state_persists_across_runs(interp):
    oopstest.run(oopstest.USER_CLASS, interp)
    oopstest.run("let u = [User new]; [u set id: 9]", interp)
    assert oopstest.run_value("[u id]", interp) == 9


def test_definitions_survive_error(interp):
    result = oopstest.run(oopstest.USER_CLASS + "[[User new] fly]; [User def: #x do: {1}]", interp)
    assert isinstance(result, oops.DoesNotUnderstand)
    assert "User" in interp.classes
    assert interp.classes.lookup("User", "x") is None


def test_last_statement_value():
    assert oopstest.run_value("1; 2; 3") == 3
    assert oopstest.run_value("") is None
    assert oopstest.run_value("let x = 5") == 5
