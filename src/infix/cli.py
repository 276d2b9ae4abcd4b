import sys
from argparse import ArgumentParser, OPTIONAL
import traceback

from prompt_toolkit import PromptSession

from .util import ParserError
from .lexer import tokenize
from .parser import convert
from .machine import Machine
from .registry import Registry


class InteractiveInput:
    def __init__(self, prompt, quit=None):
        self.prompt = prompt
        self.quit = quit

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    prompt_continuation=' ' * len(self.prompt),
                                    erase_when_done=False)
            while True:
                line = session.prompt()
                if line.strip() == self.quit:
                    return
                yield line
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the expression evaluator.
    '''

    DEFAULT_PROMPT = '> '
    QUIT = 'quit'

    def dumper(self):
        '''
        Dump the tokens and postfix form of each expression.
        '''
        print('<kind>\t<payload>')
        for line in self.args.expressions:
            tokens = list(tokenize(line))
            for token in tokens:
                print(token.kind.name, repr(token.payload), sep='\t')
            postfix = convert(tokens)
            print('postfix:', *postfix.tokens)
            print('arities:', *postfix.arities)

    def executor(self):
        '''
        Evaluate each expression, printing its value.
        '''
        machine = Machine(self.registry)
        for line in self.args.expressions:
            if not line.strip():
                continue
            try:
                postfix = convert(tokenize(line))
                print(machine.evaluate(postfix.tokens,
                                       postfix.arities).to_text())
            except ParserError as e:
                self.failed = True
                self.report(e)

    def report(self, error):
        '''
        Print what went wrong; with the traceback, if verbose.
        '''
        print('{}: {}'.format(error.summary, error.args[0]),
              file=sys.stderr)
        if self.args.verbose:
            traceback.print_exception(type(error), error,
                                      error.__traceback__,
                                      file=sys.stderr)

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - interactive or prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.interactive or self.args.prompt or \
           sys.stdin.isatty() and sys.stdout.isatty():
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    quit=self.QUIT)
        else:
            return self._until_quit(sys.stdin)

    def _until_quit(self, lines):
        '''
        Yield lines up to, not including, one that says quit.
        '''
        for line in lines:
            if line.strip() == self.QUIT:
                return
            yield line

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(
            description='Infix expression calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('-l', '--library',
                                          nargs='+',
                                          default=[],
                                          metavar='MODULE',
                                          help='use additional Python math '
                                               'libraries')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-i', '--interactive',
                                       action='store_true',
                                       help='enable interactive mode; '
                                            '{} to leave'.format(self.QUIT))
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        self.argument_parser.add_argument('-D', '--dump',
                                          action='store_const',
                                          const=self.dumper,
                                          dest='action')
        self.argument_parser.add_argument('expression', nargs='*')
        self.argument_parser.set_defaults(action=self.executor)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.

        :return: Exit status.
        '''
        self.args = self.argument_parser.parse_args(args)
        self.failed = False
        self.registry = Registry()
        try:
            for library in self.args.library:
                self.registry.register_namespace(library)
        except ParserError as e:
            self.report(e)
            return 1

        batches = []
        if self.args.expression:
            batches.append([' '.join(self.args.expression)])
        # Expressions on the command line first, then interactively if asked.
        if self.args.interactive or not self.args.expression:
            batches.append(self._prompting_input())
        try:
            for expressions in batches:
                self.args.expressions = expressions
                self.args.action()
        except ParserError as e:
            self.report(e)
            return 1
        except KeyboardInterrupt:
            sys.exit(1)
        return 1 if self.failed else 0
