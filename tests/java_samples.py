CALCULATOR = """\
/**
 * Adds numbers to a fixed base.
 */
public class Calculator {
    private final int base;

    /**
     * @param base starting value
     */
    public Calculator(int base) {
        this.base = base;
    }

    /** @return base plus value */
    public int add(int value) {
        return base + value;
    }
}
"""

COUNTER = """\
public class Counter {
    public int count;

    public void increment() {
        count++;
    }
}"""

HELLO = """\
public class Main {
    public static void main(String[] args) {
        System.out.println("Hello");
    }
}
"""

LONG_METHOD = ("public class Long {\n    public void run() {\n" +
               "        step();\n" * 35 + "    }\n}\n")
