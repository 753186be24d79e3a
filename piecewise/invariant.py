"""
Simple class-based invariants. Adapted from:
http://people.csail.mit.edu/pgbovine/wiki/doku.php?id=pythonclassinvariants

Provides a metaclass that will call _checkInvariant before and after every
public method and after construction. Also works for getters and setters.
Does NOT call for methods that start with _, including builtins like len or
eq, as these may be used internally at times when the invariant needs
to be temporarily violated. Factory classmethods are not wrapped either; they
must call _checkInvariant manually once the new object is assembled.

Checking can be switched off for large builders by setting the environment
variable PIECEWISE_CHECK_INVARIANTS to 0, false or no before import.
"""

import functools
import os
import types

# This will have weird behavior if you change it while running
CHECK_INVARIANTS = os.environ.get("PIECEWISE_CHECK_INVARIANTS", "1").lower() \
                   not in ("0", "false", "no")

def public(func):
  if func is None:
    return None

  @functools.wraps(func)
  def wrapper(self, *args, **kw):
    self._checkInvariant() # check before executing
    res = func(self, *args, **kw)
    self._checkInvariant() # check after executing
    return res
  return wrapper

def constructor(func):
  @functools.wraps(func)
  def wrapper(self, *args, **kw):
    func(self, *args, **kw)
    self._checkInvariant() # check after executing constructor
  return wrapper

def EnforceInvariant(name, bases, attrs):
  if CHECK_INVARIANTS:
    for k in attrs:
      if k == '__init__':
        attrs[k] = constructor(attrs[k])
      # ignore private methods that start with '_' (and of course ignore _checkInvariant itself)
      elif k[0] != '_' and k != '_checkInvariant':
        f = attrs[k]
        if isinstance(f, types.FunctionType):
          attrs[k] = public(f)
        elif isinstance(f, property):
          attrs[k] = property(fget=public(f.fget), fset=public(f.fset),
                              fdel=public(f.fdel), doc=f.__doc__)
  return type(name, bases, attrs)
