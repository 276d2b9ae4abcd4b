from pytest import Item, fixture

from infix.registry import Registry


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Excessive in most cases.

    Use with pytest -rP.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))  # no repr()!)
    print('actual', item.name + ':' + str(lineno),
          # Get rid of full-diff, -vv for full diff, etc.
          '\n'.join(str(expl).splitlines()[:-2]))


class Recorder:
    '''
    Stub function that remembers how many arguments each call got.
    '''
    def __init__(self):
        self.calls = []

    def __call__(self, *args):
        self.calls.append(len(args))
        return sum(args)


@fixture
def recorder():
    return Recorder()


@fixture
def stub_registry(recorder):
    '''
    Registry without builtins, whose only function is f, a Recorder.
    '''
    registry = Registry(builtins=False)
    registry.register_namespace('stub', {'f': recorder})
    return registry
