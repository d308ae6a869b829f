import io
import logging
import unittest

from shader_graph import (
    CompilationError, CycleDetectedError, GraphError, MissingLoopStepError, NodeError,
    GraphCompiler, NoTerminalOutputError, ShaderGraphError, TypeMismatchError,
    UnknownNodeTypeError, setup_logger,
)
from shader_graph.errors import InternalConsistencyError
from shader_graph.ir.types import SocketType
from shader_graph.logger import LOGGER_NAME

from builders import GraphBuilder


class TestHierarchy(unittest.TestCase):
    def test_graph_errors(self):
        self.assertTrue(issubclass(CycleDetectedError, GraphError))
        self.assertTrue(issubclass(NoTerminalOutputError, GraphError))
        self.assertTrue(issubclass(GraphError, CompilationError))
        self.assertTrue(issubclass(CompilationError, ShaderGraphError))

    def test_node_errors_are_not_graph_errors(self):
        for cls in (UnknownNodeTypeError, MissingLoopStepError):
            self.assertTrue(issubclass(cls, NodeError))
            self.assertFalse(issubclass(cls, GraphError))

    def test_type_mismatch_is_internal(self):
        err = TypeMismatchError('n4', 'color', SocketType.VEC3, SocketType.VEC2)
        self.assertIsInstance(err, InternalConsistencyError)
        self.assertEqual(str(err), 'Node n4: Type mismatch on input "color". Expected vec3, got vec2')

    def test_cycle_message(self):
        err = CycleDetectedError(['a', 'b', 'c'])
        self.assertEqual(err.node_ids, ['a', 'b', 'c'])
        self.assertTrue(str(err).endswith('a -> b -> c'))

    def test_no_terminal_default_message(self):
        self.assertEqual(str(NoTerminalOutputError()), 'Graph must have an Output node')


class TestLogger(unittest.TestCase):
    def tearDown(self):
        logger = logging.getLogger(LOGGER_NAME)
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)

    def test_setup_logger_replaces_handlers(self):
        stream = io.StringIO()
        setup_logger(logging.DEBUG, stream=stream)
        logger = setup_logger(logging.DEBUG, stream=stream)
        self.assertEqual(len(logger.handlers), 1)

        logger.info("compiled")
        self.assertEqual(stream.getvalue(), "[ShaderGraph] [INFO] compiled\n")

    def test_module_loggers_reach_configured_stream(self):
        """Diagnostics logged by the code generator land in the setup_logger stream"""
        stream = io.StringIO()
        setup_logger(logging.DEBUG, stream=stream)

        builder = GraphBuilder()
        uv = builder.add('uv', 'uv1')
        loop = builder.add('loop', 'l1', steps=['gone'])
        out = builder.add('output', 'out1')
        builder.wire(uv, 'uv', loop, 'carry').wire(loop, 'result', out, 'color')
        shader = GraphCompiler().compile(builder.build())

        self.assertEqual(len(shader.diagnostics), 1)
        output = stream.getvalue()
        self.assertIn("[ShaderGraph] [WARNING]", output)
        self.assertIn("gone", output)


if __name__ == '__main__':
    unittest.main()
