"""OpenGL renderer drawing every petal instance from one display list."""

import math

from flower.instances import Flower

# Lazy import: OpenGL may not be available in headless/test environments
_gl = None


def _import_gl():
    global _gl
    if _gl is None:
        import OpenGL.GL as GL
        _gl = GL
    return _gl


class PetalRenderer:
    """Draws the shared petal mesh once per instance, rotated about Z."""

    def __init__(self, flower: Flower):
        self.flower = flower
        self._display_lists = {}

    def init_gl(self):
        """Initialize OpenGL state for rendering (call after context creation)."""
        GL = _import_gl()

        GL.glEnable(GL.GL_DEPTH_TEST)

        # Petals are single-sided: only the counter-clockwise face is drawn
        GL.glFrontFace(GL.GL_CCW)
        GL.glEnable(GL.GL_CULL_FACE)
        GL.glCullFace(GL.GL_BACK)

        GL.glClearColor(0.0, 0.0, 0.0, 1.0)

        for handle in range(len(self.flower.meshes)):
            self._build_display_list(handle)

    def _build_display_list(self, handle: int):
        """Pre-compile one mesh into an OpenGL display list."""
        GL = _import_gl()
        mesh = self.flower.meshes[handle]

        display_list = GL.glGenLists(1)
        GL.glNewList(display_list, GL.GL_COMPILE)

        GL.glBegin(GL.GL_TRIANGLES)
        normals = mesh.normals.reshape(-1, 3)
        for i, vertex in enumerate(mesh.positions.reshape(-1, 3)):
            GL.glNormal3fv(normals[i].tolist())
            GL.glVertex3fv(vertex.tolist())
        GL.glEnd()

        GL.glEndList()
        self._display_lists[handle] = display_list

    def render(self):
        """Draw all instances with their current rotation."""
        GL = _import_gl()
        for instance in self.flower.instances:
            display_list = self._display_lists.get(instance.mesh_handle)
            if display_list is None:
                continue
            color = self.flower.appearance_for(instance).color
            GL.glPushMatrix()
            GL.glRotatef(math.degrees(instance.rotation_z), 0.0, 0.0, 1.0)
            GL.glColor3fv(list(color))
            GL.glCallList(display_list)
            GL.glPopMatrix()

    def cleanup(self):
        """Free OpenGL resources."""
        GL = _import_gl()
        for display_list in self._display_lists.values():
            GL.glDeleteLists(display_list, 1)
        self._display_lists = {}
