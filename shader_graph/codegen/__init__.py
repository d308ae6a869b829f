# Code Generation Package
# Node code generation, loop unrolling and shader assembly.
# Submodules are imported directly; node definitions depend on shader_lib and expr.
