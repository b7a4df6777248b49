# registry.py


class ParticleRegistry:
    """
    Insertion-ordered collection of live ParticleBundles.

    Iteration through sweep() runs from the highest index to the lowest, so
    the bundle being visited can be removed without disturbing the rest of
    the pass.
    """
    def __init__(self):
        self._bundles = []

    def __len__(self):
        return len(self._bundles)

    def __bool__(self):
        return bool(self._bundles)

    def __iter__(self):
        return iter(list(self._bundles))

    def extend(self, bundles):
        self._bundles.extend(bundles)

    def sweep(self, visit):
        """
        Calls visit(bundle) for every bundle, high index to low. A bundle is
        removed when visit returns True.

        Returns the number of bundles removed.
        """
        removed = 0
        for i in range(len(self._bundles) - 1, -1, -1):
            if visit(self._bundles[i]):
                del self._bundles[i]
                removed += 1
        return removed

    def clear(self):
        self._bundles.clear()
